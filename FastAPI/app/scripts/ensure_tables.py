"""
Create any missing tables (users, profiles, employers, job_orders, applications,
complaints). Existing tables are left untouched.
Usage: python -m app.scripts.ensure_tables
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from app.database import Base, ensure_tables_exist


def main():
    ensure_tables_exist()
    print(f"DB table check complete ({', '.join(sorted(Base.metadata.tables))}).")


if __name__ == "__main__":
    main()
