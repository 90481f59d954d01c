import json

from infrastructure.logging.audit import DosingAuditLogger


def test_log_dose_writes_one_json_line(tmp_path):
    path = tmp_path / "audit" / "dosing.log"
    audit = DosingAuditLogger(str(path), logger_name="planterbox.audit.test_write")
    try:
        audit.log_dose("box-1", "ph_up", "dosed", ph=5.0, ppm=500.0, reserved_ms=120_000, busy_until_ms=42)
        audit.log_dose("box-1", "nutrient", "lost_race", ppm=300.0, reserved_ms=300_000)
    finally:
        audit.close()

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["scope_id"] == "box-1"
    assert first["action"] == "ph_up"
    assert first["outcome"] == "dosed"
    assert first["reading"] == {"ph": 5.0, "ppm": 500.0}
    assert first["busy_until_ms"] == 42
    assert json.loads(lines[1])["busy_until_ms"] is None


def test_file_is_created_lazily(tmp_path):
    path = tmp_path / "dosing.log"
    audit = DosingAuditLogger(str(path), logger_name="planterbox.audit.test_lazy")
    try:
        assert not path.exists()
    finally:
        audit.close()


def test_repeat_construction_does_not_duplicate_handlers(tmp_path):
    path = tmp_path / "dosing.log"
    first = DosingAuditLogger(str(path), logger_name="planterbox.audit.test_dupes")
    second = DosingAuditLogger(str(path), logger_name="planterbox.audit.test_dupes")
    try:
        assert len(second.logger.handlers) == 1
    finally:
        first.close()
        second.close()
