import json
from pathlib import Path

from calculator import storage


def test_settings_get_and_save(tmp_db: Path) -> None:
    settings = storage.get_settings()
    assert settings == storage.DEFAULT_SETTINGS

    storage.save_settings({"language": "en", "show_tips": False})
    assert storage.get_settings()["language"] == "en"
    assert storage.get_settings()["show_tips"] is False


def test_settings_merge_new_defaults(tmp_db: Path) -> None:
    storage._save_db({"settings": {"language": "en"}, "history": []})
    assert storage.get_settings() == {"language": "en", "show_tips": True}


def test_history_add_get_clear_and_limit(tmp_db: Path) -> None:
    for i in range(55):
        storage.add_history(f"{i}+1", float(i + 1))

    history = storage.get_history()
    assert len(history) == storage.HISTORY_LIMIT == 50
    assert history[0]["expression"] == "54+1"
    assert history[-1]["expression"] == "5+1"

    storage.clear_history()
    assert storage.get_history() == []


def test_history_entry_fields(tmp_db: Path) -> None:
    entry = storage.add_history("0.1+0.2", 0.1 + 0.2)
    assert entry["display_expression"] == "0.1 + 0.2"
    assert entry["display_result"] == "0.3"
    assert entry["result"] == 0.1 + 0.2
    assert set(entry) == {"expression", "result", "display_expression", "display_result", "timestamp"}
    assert storage.get_history() == [entry]


def test_clear_all_data(tmp_db: Path) -> None:
    storage.save_settings({"language": "en", "show_tips": False})
    storage.add_history("1+1", 2.0)
    storage.clear_all_data()

    assert storage.get_settings()["language"] == "zh-TW"
    assert storage.get_history() == []


def test_load_db_handles_invalid_json(tmp_db: Path) -> None:
    tmp_db.parent.mkdir(parents=True, exist_ok=True)
    tmp_db.write_text("{not-json", encoding="utf-8")

    db = storage._load_db()
    assert "settings" in db
    assert "history" in db


def test_load_db_handles_wrong_shape(tmp_db: Path) -> None:
    tmp_db.parent.mkdir(parents=True, exist_ok=True)
    tmp_db.write_text("[1, 2, 3]", encoding="utf-8")

    assert storage._load_db() == {"settings": storage.DEFAULT_SETTINGS, "history": []}


def test_save_db_persists_content(tmp_db: Path) -> None:
    storage._save_db({"settings": {"language": "en"}, "history": []})
    content = json.loads(tmp_db.read_text(encoding="utf-8"))
    assert content["settings"]["language"] == "en"
