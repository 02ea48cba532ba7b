"""
Register urls and run checks from the command line.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from app.services.url_service import UrlService
from app.validators.url_validator import UrlValidationError
from db.repositories.errors import PersistenceError, UrlNotFoundError
from db.session import SessionLocal


def main() -> int:
    parser = argparse.ArgumentParser(description="Register a url or run a check against one.")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--register", dest="raw_url", help="Url to register.")
    group.add_argument("--url-id", dest="url_id", type=int, help="Registered url id to check.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    service = UrlService()
    with SessionLocal() as db:
        try:
            if args.raw_url is not None:
                registered = service.register_url(db=db, raw_url=args.raw_url)
                payload = {
                    "id": registered.url_id,
                    "created": registered.created,
                    "severity": registered.flash.severity.value,
                    "message": registered.flash.message,
                }
            else:
                result = service.run_check(db=db, url_id=args.url_id)
                payload = {
                    "url_id": result.redirect_target_id,
                    "outcome": result.outcome_kind.value,
                    "severity": result.flash.severity.value,
                    "message": result.flash.message,
                    "status_code": result.check.status_code if result.check else None,
                }
        except UrlValidationError as exc:
            print(json.dumps(exc.to_dict(), indent=2), file=sys.stderr)
            return 2
        except UrlNotFoundError as exc:
            print(str(exc), file=sys.stderr)
            return 1
        except PersistenceError as exc:
            print(f"Storage error: {exc}", file=sys.stderr)
            return 1

    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
