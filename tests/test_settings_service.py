from tryout.models.site_setting import SiteSetting
from tryout.services import settings_service


def test_announcement_absent_until_set(db):
    assert settings_service.get_announcement(db) is None


def test_setting_announcement_replaces_the_single_entry(db):
    settings_service.set_announcement(db, title="Tryout 1", content="Starts Monday", url="https://example.com/1")
    out = settings_service.set_announcement(db, title="Tryout 2", content=None, url=None)

    assert out["title"] == "Tryout 2"
    assert out["content"] is None
    assert db.query(SiteSetting).count() == 1
    assert settings_service.get_announcement(db)["title"] == "Tryout 2"
