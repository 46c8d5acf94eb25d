"""Seed script to insert demo skills, education and goals.

Fills the profile with a sample persona and adds a handful of rows to each
collection so the dashboard and the advice prompt have something to work
with. Token fields are never touched.

Usage:
  python scripts/seed_db.py            # seed
  python scripts/seed_db.py --dry-run  # show what would be inserted
  python scripts/seed_db.py --reset    # delete existing collections first
"""
import argparse
import sys
from pathlib import Path

# When running the script directly (e.g. `python scripts/seed_db.py`),
# ensure the repository root is on `sys.path` so local package imports
# like `config.settings` resolve correctly without setting `PYTHONPATH`.
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlmodel import Session

from config.settings import settings
from models import Education, Goal, GoalStatus, Skill
from repositories import (
    EducationRepository,
    GoalRepository,
    ProfileRepository,
    SkillRepository,
)
from utils.database import create_db_engine, init_db

DEMO_PROFILE = {
    "full_name": "Budi Santoso",
    "current_role": "Backend Developer",
    "target_role": "Engineering Manager",
    "bio": "Five years building payment APIs in Go and Python. Mentors two junior developers.",
}

DEMO_SKILLS = [
    {"name": "Go", "level": 4, "category": "Teknik"},
    {"name": "Python", "level": 4, "category": "Teknik"},
    {"name": "PostgreSQL", "level": 3, "category": "Teknik"},
    {"name": "Mentoring", "level": 3, "category": "Soft skill"},
    {"name": "Roadmap planning", "level": 2, "category": "Management"},
]

DEMO_EDUCATION = [
    {"institution": "Institut Teknologi Bandung", "degree": "BSc", "field": "Informatics", "start_date": "2015", "end_date": "2019"},
    {"institution": "Coursera", "degree": "Certificate", "field": "Engineering Management", "start_date": "2024", "end_date": "2024"},
]

DEMO_GOALS = [
    {"title": "Lead a team of five", "deadline": "2026-12-31", "status": GoalStatus.PENDING},
    {"title": "Ship the payments v2 migration", "deadline": "2025-06-30", "status": GoalStatus.COMPLETED},
    {"title": "Give a talk at a local meetup", "deadline": None, "status": GoalStatus.PENDING},
]


def perform_reset(db: Session) -> int:
    """Delete every skill, education and goal row.

    Returns number of rows deleted.
    """
    deleted = 0
    for model in (Skill, Education, Goal):
        res = db.exec(delete(model))
        deleted += res.rowcount if res.rowcount is not None else 0
    db.commit()
    return deleted


def seed(dry_run: bool = False, reset_flag: bool = False) -> bool:
    if dry_run:
        print("DRY RUN: would seed the following:")
        print(f" Profile: {DEMO_PROFILE['full_name']} ({DEMO_PROFILE['current_role']} -> {DEMO_PROFILE['target_role']})")
        print(f" Skills: {', '.join(s['name'] for s in DEMO_SKILLS)}")
        print(f" Education: {', '.join(e['institution'] for e in DEMO_EDUCATION)}")
        print(f" Goals: {', '.join(g['title'] for g in DEMO_GOALS)}")
        return True

    engine = create_db_engine(settings.DATABASE_URL)
    init_db(engine)

    try:
        with Session(engine) as db:
            if reset_flag:
                deleted = perform_reset(db)
                print(f"Reset removed {deleted} rows")

            ProfileRepository(db).update_text_fields(**DEMO_PROFILE)

            skills = SkillRepository(db)
            for skill in DEMO_SKILLS:
                skills.create(**skill)

            education = EducationRepository(db)
            for record in DEMO_EDUCATION:
                education.create(**record)

            goals = GoalRepository(db)
            for goal in DEMO_GOALS:
                created = goals.create(title=goal["title"], deadline=goal["deadline"])
                goals.set_status(created.id, goal["status"].value)

        print(
            f"Seeded {len(DEMO_SKILLS)} skills, {len(DEMO_EDUCATION)} education records "
            f"and {len(DEMO_GOALS)} goals into {settings.DATABASE_URL}"
        )
        return True
    except Exception as e:
        print(f"ERROR: seeding failed: {e}", file=sys.stderr)
        return False
    finally:
        engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed demo career data")
    parser.add_argument("--dry-run", action="store_true", help="Print what would be inserted")
    parser.add_argument("--reset", action="store_true", help="Delete existing skills, education and goals first")
    args = parser.parse_args()

    ok = seed(dry_run=args.dry_run, reset_flag=args.reset)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
