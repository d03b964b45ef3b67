"""
Command line: extract listings from one URL and print (or save) the outcome as JSON.

    python -m listing_scraper https://www.cardekho.com/used-cars+in+mumbai
    python -m listing_scraper https://www.cars24.com/buy-used-honda-city-2018-cars-mumbai-10589432/ --mode detail --out listing.json
"""

import argparse
import json
import sys
from pathlib import Path

from .log import init_logger
from .scraper import ListingScraper


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="listing_scraper", description="Extract car listings from a catalog or detail page.")
    p.add_argument("url", help="Catalog or detail page URL (a URL containing 'demo' returns sample data)")
    p.add_argument("--mode", choices=("auto", "catalog", "detail"), default="auto",
                   help="auto detects the page type (default)")
    p.add_argument("--out", help="Write JSON here instead of stdout")
    p.add_argument("--log-level", default="INFO", help="Console log level (default INFO)")
    p.add_argument("--log-file", default=None, help="Also log at DEBUG to this file")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    init_logger(console_level=args.log_level, log_file=args.log_file)

    with ListingScraper() as scraper:
        if args.mode == "catalog":
            outcome = scraper.extract_catalog(args.url)
        elif args.mode == "detail":
            outcome = scraper.extract_detail(args.url)
        else:
            outcome = scraper.extract(args.url)

    text = json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False)
    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        print(f"Saved {outcome.count if outcome.ok else 0} listing(s) to {out}")
    else:
        print(text)
    return 0 if outcome.ok else 1


if __name__ == "__main__":
    sys.exit(main())
