"""CLI job to search Google Places for businesses and optionally export them."""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from webless_explorer.core.config import get_settings
from webless_explorer.core.errors import ValidationError
from webless_explorer.etl.export import export_data
from webless_explorer.models import ExportFormat, SearchResponse
from webless_explorer.pipeline.search import DEFAULT_RADIUS, build_pipeline, validate_search_request

logger = logging.getLogger(__name__)


def run_search_job(
    *,
    query: str,
    radius: int,
    only_no_website: bool,
    export_format: Optional[str] = None,
    output_dir: str = ".",
) -> SearchResponse:
    query, radius = validate_search_request(query, radius)

    pipeline = build_pipeline(get_settings())
    response = pipeline.run(query, radius, only_no_website)
    if response.error:
        return response

    dashboard = response.dashboard
    logger.info(
        "Search complete: total=%d shown=%d with_website=%d without_website=%d",
        dashboard.total,
        len(response.results),
        dashboard.with_website,
        dashboard.without_website,
    )

    if export_format:
        result = export_data(response.results, export_format)
        if not result.success:
            logger.warning("Export skipped: %s", result.error)
            return response
        target = Path(output_dir) / result.file_name
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(result.file_content, bytes):
            target.write_bytes(result.file_content)
        else:
            target.write_text(result.file_content, encoding="utf-8")
        logger.info("Exported %d records to %s", len(response.results), target)

    return response


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search businesses and find the ones without a website")
    parser.add_argument("--query", dest="query", required=True, help="Search text, e.g. 'cafes in Bali'")
    parser.add_argument(
        "--radius",
        dest="radius",
        type=int,
        default=DEFAULT_RADIUS,
        help="Search radius in meters (100-50000)",
    )
    parser.add_argument(
        "--only-no-website",
        dest="only_no_website",
        action="store_true",
        help="Only keep businesses without a website",
    )
    parser.add_argument(
        "--export",
        dest="export_format",
        choices=[fmt.value for fmt in ExportFormat],
        help="Write the results to a file in this format",
    )
    parser.add_argument("--output-dir", dest="output_dir", default=".", help="Directory for exported files")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        response = run_search_job(
            query=args.query,
            radius=args.radius,
            only_no_website=args.only_no_website,
            export_format=args.export_format,
            output_dir=args.output_dir,
        )
    except ValidationError as exc:
        logger.error("Invalid search: %s", exc)
        return 1

    if response.error:
        logger.error("Search failed: %s", response.error)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
