from pathlib import Path
import argparse
import sys

from flask import Flask

from alerts import DatasetError, load_records
from interface.app import create_app, render_dashboard
from interface.config import load_config
from interface.logger_config import setup_logger


# ================= CLI =================
def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Network Alerts Dashboard")
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--data", help="JSON dataset of alert records")
    parser.add_argument("--export", metavar="PATH", help="write the page to a static HTML file and exit")
    return parser.parse_args(argv)


# ================= EXPORT =================
def export_page(app: Flask, path) -> Path:
    path = Path(path)
    with app.app_context():
        html = render_dashboard(app)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path


# ================= MAIN =================
def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = load_config(args.config)
    if args.data:
        cfg.data_path = args.data

    logger = setup_logger("dashboard", log_file=cfg.log_file)

    try:
        records = load_records(cfg.data_path)
    except DatasetError as e:
        logger.error("Error occurred: %s", e)
        return 1
    logger.info("Loaded %d alert records from %s", len(records), cfg.data_path)

    app = create_app(records, cfg)

    if args.export:
        out = export_page(app, args.export)
        logger.info("Dashboard exported to %s", out)
        return 0

    logger.info("Dashboard running on http://%s:%d", cfg.host, cfg.port)
    app.run(host=cfg.host, port=cfg.port, debug=cfg.debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
