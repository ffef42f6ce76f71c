import importlib

import pytest

from shamir_audit.policy import AuditPolicy, load_policy


def test_defaults(monkeypatch):
    for name in (
        "SHAMIR_AUDIT_WORKERS",
        "SHAMIR_AUDIT_MAX_SUBSETS",
        "SHAMIR_AUDIT_TIE_BREAK",
        "SHAMIR_AUDIT_DIR",
        "SHAMIR_AUDIT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    policy = load_policy()
    assert policy == AuditPolicy()
    assert policy.tie_break == "smallest"
    assert policy.max_subsets is None


def test_policy_env_overrides(monkeypatch):
    monkeypatch.setenv("SHAMIR_AUDIT_WORKERS", "4")
    monkeypatch.setenv("SHAMIR_AUDIT_MAX_SUBSETS", "1000")
    monkeypatch.setenv("SHAMIR_AUDIT_TIE_BREAK", "fail")
    monkeypatch.setenv("SHAMIR_AUDIT_DIR", "/tmp/trail")
    monkeypatch.setenv("SHAMIR_AUDIT_LOG_LEVEL", "debug")

    policy_module = importlib.import_module("shamir_audit.policy")
    reloaded = importlib.reload(policy_module)

    try:
        policy = reloaded.policy
        assert policy.workers == 4
        assert policy.max_subsets == 1000
        assert policy.tie_break == "fail"
        assert policy.audit_dir == "/tmp/trail"
        assert policy.log_level == "DEBUG"
    finally:
        for name in (
            "SHAMIR_AUDIT_WORKERS",
            "SHAMIR_AUDIT_MAX_SUBSETS",
            "SHAMIR_AUDIT_TIE_BREAK",
            "SHAMIR_AUDIT_DIR",
            "SHAMIR_AUDIT_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)
        importlib.reload(policy_module)


def test_malformed_env_values_fall_back(monkeypatch):
    monkeypatch.setenv("SHAMIR_AUDIT_WORKERS", "many")
    monkeypatch.setenv("SHAMIR_AUDIT_MAX_SUBSETS", "-3")
    monkeypatch.setenv("SHAMIR_AUDIT_TIE_BREAK", "largest")
    policy = load_policy()
    assert policy.workers == 1
    assert policy.max_subsets is None
    assert policy.tie_break == "smallest"


def test_yaml_file_then_env(tmp_path, monkeypatch):
    monkeypatch.delenv("SHAMIR_AUDIT_TIE_BREAK", raising=False)
    monkeypatch.delenv("SHAMIR_AUDIT_MAX_SUBSETS", raising=False)
    monkeypatch.setenv("SHAMIR_AUDIT_WORKERS", "3")
    path = tmp_path / "policy.yaml"
    path.write_text("reconstruction:\n  workers: 2\n  max_subsets: 50\n  tie_break: fail\n")
    policy = load_policy(path)
    assert policy.workers == 3
    assert policy.max_subsets == 50
    assert policy.tie_break == "fail"


def test_yaml_file_errors(tmp_path):
    unknown = tmp_path / "unknown.yaml"
    unknown.write_text("threads: 2\n")
    with pytest.raises(ValueError):
        load_policy(unknown)

    with pytest.raises(FileNotFoundError):
        load_policy(tmp_path / "missing.yaml")


def test_invalid_policy_values():
    with pytest.raises(ValueError):
        AuditPolicy(workers=0)
    with pytest.raises(ValueError):
        AuditPolicy(max_subsets=0)
    with pytest.raises(ValueError):
        AuditPolicy(tie_break="random")
    with pytest.raises(ValueError):
        AuditPolicy(log_level="VERBOSE")
    with pytest.raises(ValueError):
        AuditPolicy(log_level=10)
    assert AuditPolicy(log_level="info").log_level == "INFO"


def test_log_level_env_is_matched_case_insensitively(monkeypatch):
    monkeypatch.setenv("SHAMIR_AUDIT_LOG_LEVEL", "verbose")
    assert load_policy().log_level == "WARNING"

    monkeypatch.setenv("SHAMIR_AUDIT_LOG_LEVEL", "debug")
    assert load_policy().log_level == "DEBUG"


def test_non_string_log_level_in_yaml(tmp_path, monkeypatch):
    monkeypatch.delenv("SHAMIR_AUDIT_LOG_LEVEL", raising=False)
    path = tmp_path / "policy.yaml"
    path.write_text("reconstruction:\n  log_level: 10\n")
    with pytest.raises(ValueError):
        load_policy(path)
