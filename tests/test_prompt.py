from imgcaption.client.prompt import FALLBACK_TEMPLATE, build_prompt, load_prompt_template

TEMPLATE = "Lang: {{lang}} Tone: {{tone}} {{extra_instructions}}."


def test_empty_extra_collapses():
    assert build_prompt(TEMPLATE, "en", "Funny", "") == "Lang: en Tone: Funny ."


def test_extra_is_wrapped():
    out = build_prompt(TEMPLATE, "en", "Funny", "make it spicy")
    assert "Additional instructions: make it spicy" in out
    assert out == "Lang: en Tone: Funny Additional instructions: make it spicy."


def test_extra_is_trimmed_at_the_end():
    out = build_prompt(TEMPLATE, "en", "Funny", "short   ")
    assert out == "Lang: en Tone: Funny Additional instructions: short."


def test_same_inputs_same_output():
    args = (TEMPLATE, "Chinese", "Poetic", "mention the sea")
    assert build_prompt(*args) == build_prompt(*args)


def test_only_first_occurrence_is_replaced():
    out = build_prompt("{{lang}} and {{lang}}", "en", "Funny")
    assert out == "en and {{lang}}"


def test_template_is_not_mutated():
    template = str(TEMPLATE)
    build_prompt(template, "en", "Funny", "x")
    assert template == TEMPLATE


def test_missing_template_file_uses_fallback(tmp_path):
    assert load_prompt_template(tmp_path / "nope.txt") == FALLBACK_TEMPLATE


def test_fallback_template_has_each_placeholder_once():
    for placeholder in ("{{lang}}", "{{tone}}", "{{extra_instructions}}"):
        assert FALLBACK_TEMPLATE.count(placeholder) == 1
