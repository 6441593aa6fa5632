"""Command-line entry point for the portfolio site."""
import argparse
import logging
import sys

from .catalog import PublicationCatalog
from .config import Config
from .exceptions import CatalogLoadError
from .filtering import PublicationFilter
from .utils.logging_setup import setup_logging


def check_catalog(source: str) -> int:
    """Load the catalog and print a short summary. Returns an exit code."""
    catalog = PublicationCatalog(source, timeout=Config.CATALOG_TIMEOUT)
    try:
        publications = catalog.load()
    except CatalogLoadError as e:
        print(f"Catalog failed to load: {e.reason}", file=sys.stderr)
        return 1

    print(f"{len(publications)} publications in {source}")
    print(f"Featured: {len(catalog.featured())}")
    print(f"Downloadable on request: {sum(1 for p in publications if p.download_requestable)}")
    print("Facets: " + ", ".join(PublicationFilter(publications).facets()))
    return 0


def serve(host: str, port: int, debug: bool) -> int:
    from ui.app import app

    logging.info(f"Serving portfolio on http://{host}:{port}")
    app.run(host=host, port=port, debug=debug)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="portfolio", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    serve_cmd = sub.add_parser("serve", help="run the development server")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=5000)
    serve_cmd.add_argument("--debug", action="store_true")

    check_cmd = sub.add_parser("check-catalog", help="load the catalog and summarise it")
    check_cmd.add_argument("--source", default=Config.CATALOG_SOURCE)

    args = parser.parse_args(argv)

    if args.command == "serve":
        setup_logging(Config.LOG_DIR, Config.LOG_LEVEL)
        return serve(args.host, args.port, args.debug)

    setup_logging(None, Config.LOG_LEVEL)
    return check_catalog(args.source)


if __name__ == "__main__":
    sys.exit(main())
