from pathlib import Path

import typer

from .config import EdgeDetector, EdgeMapConfig, OutputSettings, RegionFilterConfig, Settings
from .errors import ImageReadError, ImageWriteError, OutputDirectoryError
from .logging import get_logger, set_verbose
from .pipeline import run

app = typer.Typer(help="scansplit – split a flatbed scan into its individual photos", no_args_is_help=True)


@app.command()
def split(
    image_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Scanned image holding several photos"),
    output_dir: Path = typer.Argument(..., exists=True, file_okay=False, help="Existing directory for the extracted photos"),
    min_width: int = typer.Option(32, min=0, help="Minimum photo width in pixels"),
    min_height: int = typer.Option(32, min=0, help="Minimum photo height in pixels"),
    edge_detector: EdgeDetector = typer.Option(EdgeDetector.LAPLACIAN, case_sensitive=False, help="Edge detection algorithm"),
    gaussian: bool = typer.Option(True, "--gaussian/--no-gaussian", help="Blur the grayscale image before edge detection"),
    gaussian_kernel: int = typer.Option(3, help="Gaussian kernel size (odd)"),
    threshold: bool = typer.Option(False, "--threshold/--no-threshold", help="Binarise the edge map"),
    threshold_value: int = typer.Option(16, min=0, max=255, help="Edge map threshold"),
    convolve: bool = typer.Option(False, "--convolve/--no-convolve", help="Box-filter the thresholded edge map"),
    jpeg_quality: int = typer.Option(100, min=0, max=100, help="JPEG quality for written photos"),
    image_format: str = typer.Option("jpg", "--format", help="Output image format"),
    write_manifest: bool = typer.Option(True, "--write-manifest/--no-write-manifest", help="Write JSON manifest file"),
    debug: bool = typer.Option(False, "--debug/--no-debug", help="Write intermediate stage images to <output>/debug"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every pipeline stage at DEBUG level"),
) -> None:
    """
    Extract the photos scanned together on IMAGE_PATH into OUTPUT_DIR.

    Each photo is written as region-<n>, numbered from 1, followed by a copy
    of the original scan.
    """
    if verbose:
        set_verbose()
    logger = get_logger(__name__)

    try:
        settings = Settings(
            edges=EdgeMapConfig(
                detector=edge_detector,
                gaussian_blur=gaussian,
                gaussian_kernel_size=gaussian_kernel,
                thresholding=threshold,
                threshold=threshold_value,
                convolution=convolve,
            ),
            regions=RegionFilterConfig(min_width=min_width, min_height=min_height),
            output=OutputSettings(
                image_format=image_format,
                jpeg_quality=jpeg_quality,
                write_manifest=write_manifest,
                debug=debug,
            ),
        )
    except ValueError as exc:
        logger.error(f"Invalid configuration: {exc}")
        raise typer.Exit(code=2) from exc

    try:
        logger.info(f"Splitting scan: {image_path}")
        report = run(image_path, output_dir, settings)
    except OutputDirectoryError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=2) from exc
    except ImageReadError as exc:
        logger.error(f"Cannot read image: {exc}")
        raise typer.Exit(code=1) from exc
    except ImageWriteError as exc:
        logger.error(f"Failed to save photos: {exc}")
        raise typer.Exit(code=1) from exc

    typer.echo("\nSplit complete!")
    typer.echo(f"Processed: {image_path}")
    typer.echo(f"Candidate areas: {report.candidate_count}")
    typer.echo(f"Photos extracted: {report.region_count}")
    if report.skipped_count:
        typer.echo(f"Skipped regions: {report.skipped_count}")
    typer.echo(f"Filter criteria: {min_width}x{min_height} pixels minimum")
    typer.echo(f"Output directory: {output_dir}")
    if report.manifest_path:
        typer.echo(f"Manifest: {report.manifest_path.name}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
