"""Development server for the home-services booking API."""
from __future__ import annotations

import argparse
import os

from homeservices import create_app


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--host", default=os.environ.get("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "5000")))
    parser.add_argument(
        "--debug",
        action="store_true",
        default=os.environ.get("FLASK_DEBUG", "0") in {"1", "true", "True"},
    )
    parser.add_argument("--routes", action="store_true", help="log the mounted endpoints before serving")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    app = create_app()

    if args.routes:
        for rule in sorted(app.url_map.iter_rules(), key=lambda r: r.rule):
            methods = ",".join(sorted(rule.methods - {"HEAD", "OPTIONS"}))
            app.logger.info("%-32s %-12s %s", rule.rule, methods, rule.endpoint)

    app.logger.info(
        "Serving on %s:%d (feedback %s)",
        args.host,
        args.port,
        "on" if app.config["FEEDBACK_ENABLED"] else "off",
    )
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
