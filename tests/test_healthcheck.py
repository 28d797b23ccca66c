from healthcheck import is_healthy


def test_missing_file_is_unhealthy(tmp_path):
    assert is_healthy(tmp_path / "healthcheck", 300) is False


def test_recent_timestamp_is_healthy(tmp_path):
    path = tmp_path / "healthcheck"
    path.write_text("1000.0")
    assert is_healthy(path, 300, now=1200.0) is True


def test_old_timestamp_is_unhealthy(tmp_path):
    path = tmp_path / "healthcheck"
    path.write_text("1000.0")
    assert is_healthy(path, 300, now=1301.0) is False


def test_garbage_is_unhealthy(tmp_path):
    path = tmp_path / "healthcheck"
    path.write_text("not-a-timestamp")
    assert is_healthy(path, 300) is False
