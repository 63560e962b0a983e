from aiosu.forwarder import (
    APP_DIR,
    APP_FILE,
    FORWARDER_FILE,
    HIDDEN_FILE,
    STAGED_FILE,
    STAGED_SWITCH_DIR,
    main,
    relaunch_update,
)


def _touch(path, text=""):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_returns_app_file_and_creates_dir(tmp_path):
    result = relaunch_update(tmp_path)
    assert result == tmp_path / APP_FILE
    assert (tmp_path / APP_DIR).is_dir()


def test_removes_old_versioned_builds(tmp_path):
    app_dir = tmp_path / APP_DIR
    _touch(app_dir / "aio-switch-updater-v2.0.nro")
    _touch(app_dir / "aio-switch-updater-v2.0.nro.star")
    _touch(app_dir / "keep.txt")
    relaunch_update(tmp_path)
    assert sorted(p.name for p in app_dir.iterdir()) == ["keep.txt"]


def test_installs_staged_build(tmp_path):
    _touch(tmp_path / APP_FILE, "old")
    _touch(tmp_path / STAGED_FILE, "new")
    target = relaunch_update(tmp_path)
    assert target.read_text(encoding="utf-8") == "new"
    assert not (tmp_path / STAGED_SWITCH_DIR).exists()


def test_keeps_existing_build_without_staged_one(tmp_path):
    _touch(tmp_path / APP_FILE, "current")
    target = relaunch_update(tmp_path)
    assert target.read_text(encoding="utf-8") == "current"


def test_removes_hidden_and_forwarder_files(tmp_path):
    _touch(tmp_path / HIDDEN_FILE)
    _touch(tmp_path / FORWARDER_FILE)
    relaunch_update(tmp_path)
    assert not (tmp_path / HIDDEN_FILE).exists()
    assert not (tmp_path / FORWARDER_FILE).exists()


def test_main_prints_target(tmp_path, capsys):
    assert main([str(tmp_path)]) == 0
    assert capsys.readouterr().out.strip() == str(tmp_path / APP_FILE)