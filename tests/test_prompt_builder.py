"""
Unit tests for analysis and optimization prompt construction.
"""
from app.services.keyword_taxonomy import Industry, keywords_for
from app.services.prompt_builder import (
    RESULT_SCHEMA_NAME,
    build_analysis_prompt,
    build_analysis_prompt_with_report,
    build_optimization_prompt,
    truncate_resume,
)

RESUME = "5 years Python, AWS, Docker"


def test_prompt_embeds_resume_industry_and_keywords():
    keywords = keywords_for("technology")
    prompt = build_analysis_prompt(RESUME, "technology", keywords)

    assert RESUME in prompt
    assert "'technology' industry" in prompt
    assert "Focus on these keywords: " + ", ".join(keywords) in prompt
    for hint in ("Python", "AWS", "Docker"):
        assert hint in prompt.split("Focus on these keywords:")[1]


def test_prompt_demands_json_only_for_named_schema():
    prompt = build_analysis_prompt(RESUME, Industry.TECHNOLOGY, keywords_for("technology"))

    assert f"Return ONLY a valid JSON object matching the {RESULT_SCHEMA_NAME} schema" in prompt
    for field in ('"score"', '"analysis"', '"suggestions"', '"skillsGap"'):
        assert field in prompt


def test_prompt_is_deterministic():
    keywords = keywords_for("finance")
    first = build_analysis_prompt(RESUME, "finance", keywords)
    second = build_analysis_prompt(RESUME, "finance", keywords)
    assert first == second


def test_no_limit_keeps_resume_whole():
    text = "x" * 5000
    report = build_analysis_prompt_with_report(text, "technology", ["Python"], max_chars=0)

    assert report.truncated is False
    assert report.original_length == report.included_length == 5000
    assert text in report.prompt
    assert "truncated" not in report.prompt


def test_truncation_is_explicit():
    text = "a" * 80 + "b" * 20
    report = build_analysis_prompt_with_report(text, "technology", ["Python"], max_chars=80)

    assert report.truncated is True
    assert report.original_length == 100
    assert report.included_length == 80
    assert "b" not in report.prompt.split("Resume:\n")[1].split("\n")[0]
    assert "[... resume truncated: 80 of 100 characters shown ...]" in report.prompt


def test_truncate_resume_leaves_short_text_alone():
    assert truncate_resume("short", 100) == "short"
    assert truncate_resume("short", None) == "short"


def test_optimization_prompt_lists_suggestions():
    suggestions = [
        {"title": "Quantify impact", "description": "Add numbers to achievements"},
        "Add a skills section",
        {"title": ""},
        42,
    ]
    prompt = build_optimization_prompt(RESUME, suggestions, Industry.TECHNOLOGY, ["Python", "AWS"])

    assert "- Quantify impact: Add numbers to achievements" in prompt
    assert "- Add a skills section" in prompt
    assert prompt.count("\n- ") == 2
    assert "Python, AWS" in prompt
    assert prompt.endswith(RESUME)


def test_optimization_prompt_without_suggestions_has_default_goal():
    prompt = build_optimization_prompt(RESUME, [], "technology", [])
    assert "- Improve clarity and ATS keyword coverage" in prompt
