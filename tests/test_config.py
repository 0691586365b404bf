from text_macros.runtime import MacroSettings


def test_defaults() -> None:
    settings = MacroSettings()

    assert settings.delimiter_width == 76
    assert settings.placeholder == "[...]"
    assert (settings.open_quote, settings.close_quote) == ("`", "'")


def test_from_env_reads_prefixed_values() -> None:
    settings = MacroSettings.from_env(
        {
            "TEXT_MACROS_DELIMITER_WIDTH": "40",
            "TEXT_MACROS_DELIMITER_CHAR": "=+",
            "TEXT_MACROS_PLACEHOLDER": "<snip>",
            "TEXT_MACROS_DEFAULT_TAG": "code",
            "UNRELATED": "ignored",
        }
    )

    assert settings.delimiter_width == 40
    assert settings.delimiter_char == "="
    assert settings.placeholder == "<snip>"
    assert settings.default_tag == "code"


def test_from_env_falls_back_on_bad_numbers() -> None:
    for raw in ("wide", "0", "-3"):
        settings = MacroSettings.from_env({"TEXT_MACROS_DELIMITER_WIDTH": raw})
        assert settings.delimiter_width == 76


def test_from_env_uses_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("TEXT_MACROS_CUT_LABEL", "snip")

    assert MacroSettings.from_env().cut_label == "snip"


def test_with_overrides_returns_copy() -> None:
    base = MacroSettings()

    changed = base.with_overrides(placeholder="[SNIP]")

    assert changed.placeholder == "[SNIP]"
    assert base.placeholder == "[...]"
