import pytest

from bookmark_client.modules.validation import (
    ADD_POLICY,
    MESSAGES,
    UPDATE_POLICY,
    FlowPolicy,
    ValidationError,
    ValidationResult,
    is_absolute_url,
    validate_bookmark,
    validate_bookmark_for_add,
    validate_bookmark_for_update,
    validate_memo,
    validate_tags,
    validate_url,
)


# ==================== validate_url ====================

def test_url_empty_is_required_error():
    assert validate_url("") == ValidationError("url", MESSAGES["url_required"])


def test_url_whitespace_only_is_format_error():
    # 不做 trim：纯空白不算未填写
    assert validate_url("   ") == ValidationError("url", MESSAGES["url_invalid"])


def test_url_too_long():
    long_url = "https://example.com/" + "a" * 401
    assert len(long_url) == 421
    assert validate_url(long_url) == ValidationError("url", MESSAGES["url_too_long"])


def test_url_length_boundary():
    url = "https://example.com/" + "a" * (400 - len("https://example.com/"))
    assert len(url) == 400
    assert validate_url(url) is None


def test_url_whitespace_counts_toward_length():
    url = "https://example.com" + " " * 390
    assert validate_url(url) == ValidationError("url", MESSAGES["url_too_long"])


@pytest.mark.parametrize("url", ["not-a-url", "example.com", "localhost:3000", "http://", "https:///path", "http://exa mple.com", "http://example.com:notaport"])
def test_url_invalid_format(url):
    assert validate_url(url) == ValidationError("url", MESSAGES["url_invalid"])


@pytest.mark.parametrize("url", ["https://example.com", "http://localhost:3000", "ftp://files.example.org/a.txt", "https://example.com/path?q=1#frag", "http://127.0.0.1:8080/"])
def test_url_valid(url):
    assert validate_url(url) is None


def test_url_leading_space_is_format_error():
    assert validate_url(" https://example.com") == ValidationError("url", MESSAGES["url_invalid"])


def test_is_absolute_url():
    assert is_absolute_url("https://example.com")
    assert not is_absolute_url("//example.com")
    assert not is_absolute_url("/relative/path")


# ==================== validate_memo ====================

def test_memo_required_empty():
    assert validate_memo("", True) == ValidationError("memo", MESSAGES["memo_required"])


def test_memo_required_whitespace_only():
    assert validate_memo("   ", True) == ValidationError("memo", MESSAGES["memo_required"])


def test_memo_not_required_empty():
    assert validate_memo("", False) is None
    assert validate_memo("   ") is None


def test_memo_too_long():
    assert validate_memo("a" * 401) == ValidationError("memo", MESSAGES["memo_too_long"])


def test_memo_length_uses_raw_value():
    memo = " " * 2 + "a" * 399
    assert validate_memo(memo, True) == ValidationError("memo", MESSAGES["memo_too_long"])


def test_memo_valid():
    assert validate_memo("Valid memo") is None
    assert validate_memo("a" * 400, True) is None


# ==================== validate_tags ====================

def test_tags_required_empty():
    assert validate_tags([], True) == ValidationError("tags", MESSAGES["tags_required"])


def test_tags_not_required_empty():
    assert validate_tags([], False) is None


def test_tags_too_many():
    assert validate_tags(["t"] * 11, True) == ValidationError("tags", MESSAGES["tags_too_many"])


def test_tags_count_checked_even_when_not_required():
    assert validate_tags(["t"] * 11, False) == ValidationError("tags", MESSAGES["tags_too_many"])


def test_tags_empty_tag():
    assert validate_tags(["valid", ""]) == ValidationError("tags", MESSAGES["tag_empty"])
    assert validate_tags(["valid", "   "]) == ValidationError("tags", MESSAGES["tag_empty"])


def test_tags_tag_too_long():
    assert validate_tags(["a" * 101]) == ValidationError("tags", MESSAGES["tag_too_long"])


def test_tags_first_offender_wins():
    assert validate_tags(["", "a" * 101]) == ValidationError("tags", MESSAGES["tag_empty"])
    assert validate_tags(["a" * 101, ""]) == ValidationError("tags", MESSAGES["tag_too_long"])


def test_tags_valid():
    assert validate_tags(["tech", "news"]) is None
    assert validate_tags([f"tag{i}" for i in range(10)]) is None
    assert validate_tags(["a" * 100]) is None


# ==================== 流程校验 ====================

def test_add_all_empty_reports_every_field_in_order():
    result = validate_bookmark_for_add("", "", [])
    assert result.is_valid is False
    assert [e.field for e in result.errors] == ["url", "memo", "tags"]


def test_add_all_valid():
    result = validate_bookmark_for_add("https://example.com", "Test memo", ["tag1"])
    assert result.is_valid is True
    assert result.errors == []


def test_add_single_field_error():
    result = validate_bookmark_for_add("example.com", "memo", ["tag"])
    assert not result.is_valid
    assert result.errors == [ValidationError("url", MESSAGES["url_invalid"])]


def test_update_never_checks_url():
    result = validate_bookmark_for_update("", [])
    assert result.is_valid is False
    assert [e.field for e in result.errors] == ["memo", "tags"]
    assert "url" not in result


def test_update_valid():
    assert validate_bookmark_for_update("Valid memo", ["tag1"]).is_valid


def test_update_memo_too_long():
    result = validate_bookmark_for_update("a" * 401, ["tag1"])
    assert not result.is_valid
    assert result.errors[0].field == "memo"


def test_update_tags_required():
    result = validate_bookmark_for_update("memo", [])
    assert not result.is_valid
    assert result.errors[0].field == "tags"


def test_update_whitespace_memo_required():
    result = validate_bookmark_for_update("   ", ["tag1"])
    assert result.message_for("memo") == MESSAGES["memo_required"]


def test_policies():
    assert ADD_POLICY.check_url and ADD_POLICY.memo_required and ADD_POLICY.tags_required
    assert not UPDATE_POLICY.check_url
    assert UPDATE_POLICY.memo_required and UPDATE_POLICY.tags_required


def test_custom_policy_relaxes_required_fields():
    relaxed = FlowPolicy(name="draft", check_url=False, memo_required=False, tags_required=False)
    assert validate_bookmark(relaxed, None, "", []).is_valid
    assert not validate_bookmark(relaxed, None, "a" * 401, []).is_valid


def test_validate_bookmark_positional_order():
    result = validate_bookmark(ADD_POLICY, "https://example.com", "memo", ["tag"])
    assert result.is_valid

    result = validate_bookmark(ADD_POLICY, "example.com", "", ["tag"])
    assert result.fields == ["url", "memo"]
    assert result == validate_bookmark_for_add("example.com", "", ["tag"])


def test_validate_bookmark_update_policy_ignores_url():
    assert validate_bookmark(UPDATE_POLICY, "not a url", "memo", ["tag"]).is_valid


@pytest.mark.parametrize("args", [("", "", []), ("https://example.com", "m", ["t"]), ("bad", " ", ["x"] * 11)])
def test_add_is_idempotent(args):
    assert validate_bookmark_for_add(*args) == validate_bookmark_for_add(*args)


def test_update_is_idempotent():
    assert validate_bookmark_for_update("", ["", "a"]) == validate_bookmark_for_update("", ["", "a"])


# ==================== ValidationResult ====================

def test_result_field_lookup():
    result = validate_bookmark_for_add("", "memo", [])
    assert "url" in result
    assert "memo" not in result
    assert result.get("tags") == ValidationError("tags", MESSAGES["tags_required"])
    assert result.get("memo") is None
    assert result.message_for("url") == MESSAGES["url_required"]
    assert result.message_for("memo") is None
    assert result.fields == ["url", "tags"]


def test_result_keeps_one_error_per_field():
    result = ValidationResult([
        ValidationError("memo", "first"),
        ValidationError("memo", "second"),
    ])
    assert result.errors == [ValidationError("memo", "first")]


def test_result_to_dict():
    result = validate_bookmark_for_update("", ["ok"])
    assert result.to_dict() == {
        "is_valid": False,
        "errors": [{"field": "memo", "message": MESSAGES["memo_required"]}],
    }


def test_empty_result_is_valid():
    result = ValidationResult()
    assert result.is_valid
    assert list(result) == []
