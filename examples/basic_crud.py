"""Basic CRUD example for the mini_dbal query engine."""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_dbal").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_dbal import DB, FetchStyle, ParameterKeyCollision, dsn


def main() -> None:
    # 1) Open an in-memory SQLite database.
    with DB(dsn.sqlite_memory()) as db:
        db.execute(
            "CREATE TABLE articles (id INTEGER PRIMARY KEY, title TEXT, content TEXT);"
        )

        # 2) Insert rows; keys are both columns and parameter names.
        db.insert("articles", {"title": "Article 1", "content": "Lorem ipsum"})
        db.insert("articles", {"title": "Article 2", "content": "Cras rutrum"})

        # 3) Fetch with a sub-query; `:id` and `id` name the same parameter.
        print("After id 1:", db.fetch_all("articles", "WHERE id > :id", {":id": 1}))

        # 4) Update, keeping data and WHERE parameters apart.
        db.update("articles", {"title": "Updated"}, "WHERE id = :id", {"id": 2})
        try:
            db.update("articles", {"id": 3}, "WHERE id = :id", {"id": 2})
        except ParameterKeyCollision as exc:
            print("Rejected:", exc)

        # 5) Switch row shape and list everything.
        db.set_fetch_style(FetchStyle.ASSOC)
        print("All articles:", db.fetch_all("articles"))

        # 6) Delete and truncate.
        db.delete("articles", "WHERE id = :id", {"id": 1})
        print("After delete:", db.fetch_all("articles"))
        db.truncate("articles", force=True)
        print("After truncate:", db.fetch_all("articles"))


if __name__ == "__main__":
    main()
