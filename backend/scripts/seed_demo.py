"""Seed a demo contract template and run tag extraction.

Usage (from repository root):
    python backend/scripts/seed_demo.py

Usage (from backend directory):
    python scripts/seed_demo.py
    # or
    python -m scripts.seed_demo
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make `tagmapper` imports work whether the script is run from repo root or backend/.
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from tagmapper.db.session import SessionLocal
from tagmapper.extraction.types import DelimiterPair, resolve_config
from tagmapper.schemas.template import TemplateCreate
from tagmapper.services.extraction import run_extraction_for_template
from tagmapper.services.templates import create_template, list_extracted_tags


DEMO_TEMPLATE_NAME = "Service Contract"
DEMO_CONTENT = """Service Contract - Document Template

Dear [CLIENT_NAME],

We are pleased to confirm the following details for your contract:

- Company Name: [COMPANY_NAME]
- Address: <<COMPANY_ADDRESS>>
- Phone: [PHONE_NUMBER]
- Email: «EMAIL_ADDRESS»
- Contract Date: [CONTRACT_DATE]
- Contract Value: $[CONTRACT_VALUE]
- Payment Terms: {PAYMENT_TERMS}

Reviewed by @accountManager, signed by @signatory
Thank you,
[SENDER_NAME]
"""


def parse_args() -> argparse.Namespace:
    """Parse script CLI arguments."""

    parser = argparse.ArgumentParser(description="Seed a demo template and run tag extraction.")
    parser.add_argument("--name", default=DEMO_TEMPLATE_NAME, help="Template name to register.")
    parser.add_argument("--user-id", default=None, help="Acting user id recorded on stored rows.")
    parser.add_argument(
        "--exclude-delimiters",
        action="store_true",
        help="Store bare identifiers instead of delimited tag text.",
    )
    return parser.parse_args()


def main() -> None:
    """Seed demo data and print a short summary."""

    args = parse_args()
    config = resolve_config(
        delimiter_pairs=[
            DelimiterPair("[", "]"),
            DelimiterPair("<<", ">>"),
            DelimiterPair("«", "»"),
            DelimiterPair("{", "}"),
        ],
        include_delimiters=not args.exclude_delimiters,
    )

    with SessionLocal() as db:
        template = create_template(
            db,
            TemplateCreate(name=args.name, metadata={"content": DEMO_CONTENT}),
            user_id=args.user_id,
        )
        result = run_extraction_for_template(db, template.id, config, user_id=args.user_id)
        tags = list_extracted_tags(db, template.id)

    print("Seed complete")
    print(f"template_id={result.template_id}")
    print(f"tags_created={result.tags_created}")
    for tag in tags:
        print(f"  {tag.position:>2} {tag.text:<24} {tag.pattern} ({tag.confidence})")
    print()
    print("Inspect:")
    print(f"  GET /templates/{result.template_id}/tags")
    print(f"  GET /templates/{result.template_id}/mappings")


if __name__ == "__main__":
    main()
