import json
from recall_app import create_app
from recall_app.games.name_recall.logic.name_store import FALLBACK_PATH
from recall_app.games.name_recall.seeding import seed_names
from recall_app.models import MemoryName


def run(path=FALLBACK_PATH):
    app = create_app()
    with app.app_context():
        names = json.loads(path.read_text(encoding="utf-8"))
        added, _ = seed_names(names)
        print(f"Added {added} names from {path}")

        active = MemoryName.query.filter_by(active=True).count()
        print("\nSummary")
        print(f"   Names:  {MemoryName.query.count()}")
        print(f"   Active: {active}")


if __name__ == "__main__":
    run()
