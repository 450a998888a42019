"""
Unit tests for the industry keyword taxonomy.
"""
import pytest

from app.services.keyword_taxonomy import (
    DEFAULT_INDUSTRY,
    INDUSTRY_KEYWORDS,
    Industry,
    keywords_for,
    resolve_industry,
    supported_industries,
)


@pytest.mark.parametrize("industry", list(Industry))
def test_every_industry_has_keywords(industry):
    assert len(keywords_for(industry)) > 0
    assert keywords_for(industry.value) == INDUSTRY_KEYWORDS[industry]


@pytest.mark.parametrize("value", ["astrology", "", None, 42, "tech"])
def test_unknown_industry_falls_back_to_default(value):
    assert resolve_industry(value) == DEFAULT_INDUSTRY
    assert keywords_for(value) == INDUSTRY_KEYWORDS[DEFAULT_INDUSTRY]


def test_free_form_industry_names_resolve():
    assert resolve_industry("Data Science") == Industry.DATA_SCIENCE
    assert resolve_industry("human-resources") == Industry.HUMAN_RESOURCES
    assert resolve_industry("  FINANCE ") == Industry.FINANCE


def test_technology_keywords_keep_their_order():
    keywords = keywords_for("technology")
    assert keywords[:3] == ("JavaScript", "Python", "React")
    assert "AWS" in keywords
    assert "Docker" in keywords


def test_taxonomy_is_read_only():
    with pytest.raises(TypeError):
        INDUSTRY_KEYWORDS[Industry.LEGAL] = ("Anything",)


def test_supported_industries_lists_every_identifier():
    industries = supported_industries()
    assert len(industries) == 12
    assert "technology" in industries
    assert "human_resources" in industries
