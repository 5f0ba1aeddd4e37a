"""Seed a demo project from a niche template.

Usage (from repository root):
    python backend/scripts/seed_demo.py --template restaurant --business "Cantina Sol"

Usage (from backend directory):
    python scripts/seed_demo.py
    # or
    python -m scripts.seed_demo
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sqlalchemy import delete

# Make `semgraph` imports work whether the script is run from repo root or backend/.
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from semgraph.db.session import SessionLocal
from semgraph.models.entity import SemanticEntity
from semgraph.models.relation import SemanticRelation
from semgraph.schema.niche_templates import NICHE_TEMPLATES
from semgraph.services.graph_store import GraphStore
from semgraph.services.notifications import LoggingNotificationSink
from semgraph.services.repository import SqlGraphRepository
from semgraph.services.templates import generate_from_template, require_template


DEFAULT_PROJECT_ID = "demo-project-001"


def reset_project(db, project_id: str) -> None:
    """Remove existing records for the demo project."""

    db.execute(delete(SemanticRelation).where(SemanticRelation.project_id == project_id))
    db.execute(delete(SemanticEntity).where(SemanticEntity.project_id == project_id))
    db.commit()


def parse_args() -> argparse.Namespace:
    """Parse script CLI arguments."""

    parser = argparse.ArgumentParser(description="Seed a demo project from a niche template.")
    parser.add_argument(
        "--project-id",
        default=DEFAULT_PROJECT_ID,
        help=f"Project ID to seed (default: {DEFAULT_PROJECT_ID})",
    )
    parser.add_argument(
        "--template",
        default="restaurant",
        choices=[template.key for template in NICHE_TEMPLATES],
        help="Niche template to instantiate.",
    )
    parser.add_argument("--business", default="Demo Business", help="Business name answer.")
    parser.add_argument("--location", default="", help="Location answer.")
    parser.add_argument(
        "--no",
        action="append",
        default=[],
        metavar="QUESTION_KEY",
        help="Answer 'no' to a scope question (repeatable).",
    )
    parser.add_argument(
        "--no-reset",
        action="store_true",
        help="Do not delete existing records for the project before seeding.",
    )
    return parser.parse_args()


def main() -> None:
    """Seed demo data and print a short summary."""

    args = parse_args()
    project_id: str = args.project_id
    template = require_template(args.template)
    scope_answers = {key: False for key in args.no}
    data_answers = {"business_name": args.business, "location": args.location}

    with SessionLocal() as db:
        if not args.no_reset:
            reset_project(db, project_id)

        store = GraphStore(SqlGraphRepository(db), project_id, LoggingNotificationSink())
        store.load()
        result = generate_from_template(store, template, scope_answers, data_answers)

    print("Seed complete")
    print(f"project_id={project_id}")
    print(f"template={template.key}")
    print(f"entities_created={len(result.entities)}")
    print(f"relations_created={len(result.relations)}")
    print()
    print("Inspect:")
    print(f"  GET /projects/{project_id}/graph")
    print(f"  GET /projects/{project_id}/metrics")
    print(f"  GET /projects/{project_id}/recommendations")


if __name__ == "__main__":
    main()
