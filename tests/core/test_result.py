"""Tests for wordspine.core.result module."""

import pytest

from wordspine.core.errors import KeyNotFoundError, PipelineError
from wordspine.core.result import Err, Ok, try_result


class TestOk:
    def test_unwrap(self):
        result = Ok(3)
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == 3
        assert result.unwrap_or(0) == 3

    def test_map_and_flat_map(self):
        assert Ok(2).map(lambda v: v * 10) == Ok(20)
        assert Ok(2).flat_map(lambda v: Ok(v + 1)) == Ok(3)
        assert Ok(2).flat_map(lambda v: Err(ValueError("no"))).is_err()

    def test_map_err_is_noop(self):
        result = Ok("run")
        assert result.map_err(lambda e: PipelineError("x")) is result

    def test_pattern_matching(self):
        match Ok(["run", "jog"]):
            case Ok(keys):
                assert keys == ["run", "jog"]
            case Err(_):
                pytest.fail("expected Ok")


class TestErr:
    def test_unwrap_raises(self):
        error = KeyNotFoundError("zzqx")
        result = Err(error)
        assert result.is_err()
        with pytest.raises(KeyNotFoundError):
            result.unwrap()
        assert result.unwrap_or("fallback") == "fallback"

    def test_map_skips(self):
        result = Err(ValueError("bad"))
        assert result.map(lambda v: v + 1).is_err()
        assert result.flat_map(lambda v: Ok(v)).is_err()

    def test_map_err_transforms(self):
        result = Err(ValueError("bad")).map_err(lambda e: PipelineError(str(e), cause=e))
        assert isinstance(result.error, PipelineError)

    def test_to_dict_typed(self):
        d = Err(KeyNotFoundError("zzqx")).to_dict()
        assert d["ok"] is False
        assert d["error"]["error_type"] == "KeyNotFoundError"
        assert d["error"]["context"] == {"key": "zzqx"}

    def test_to_dict_untyped(self):
        d = Err(RuntimeError("boom")).to_dict()
        assert d["error"] == {"error_type": "RuntimeError", "message": "boom"}


class TestTryResult:
    def test_success(self):
        assert try_result(lambda: 42) == Ok(42)

    def test_failure(self):
        def explode():
            raise KeyNotFoundError("zzqx")

        result = try_result(explode)
        assert result.is_err()
        assert isinstance(result.error, KeyNotFoundError)
