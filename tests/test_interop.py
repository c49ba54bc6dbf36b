from zenlang.interop import interop_err, interop_ok


def test_ok_result():
    result = interop_ok(5)
    assert result == {"_ok": 5, "_err": None}
    assert list(result) == ["_ok", "_err"]


def test_err_result():
    result = interop_err("boom")
    assert result == {"_ok": None, "_err": "boom"}
    assert list(result) == ["_ok", "_err"]


def test_results_are_independent():
    first = interop_ok(1)
    second = interop_ok(2)
    first["_ok"] = 10
    assert second["_ok"] == 2