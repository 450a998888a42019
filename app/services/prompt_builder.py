"""
Prompt construction for resume analysis and optimization.

All builders are pure: identical inputs always produce identical prompts.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Union, get_args

from app.schemas.analysis import SuggestionType
from app.services.keyword_taxonomy import Industry

RESULT_SCHEMA_NAME = "ResumeAnalysisResult"

SUGGESTION_TYPES = get_args(SuggestionType)

RESULT_SCHEMA = """{
  "score": integer 0-100 (ATS compatibility),
  "analysis": {
    "summary": string,
    "strengths": string[],
    "improvements": string[],
    "sectionAnalysis": [{"section": string, "score": integer 0-100, "feedback": string}]
  },
  "suggestions": [{
    "type": "%s",
    "title": string,
    "description": string,
    "priority": "high" | "medium" | "low",
    "effort": "easy" | "moderate" | "difficult"
  }],
  "skillsGap": [{
    "skill": string,
    "currentLevel": integer 0-10,
    "targetLevel": integer 0-10,
    "importance": integer 0-10,
    "marketDemand": integer 0-10
  }]
}""" % '" | "'.join(SUGGESTION_TYPES)


@dataclass(frozen=True)
class PromptBuildResult:
    prompt: str
    truncated: bool
    original_length: int
    included_length: int


def _industry_name(industry: Union[Industry, str]) -> str:
    return industry.value if isinstance(industry, Industry) else str(industry)


def truncate_resume(resume_text: str, max_chars: Optional[int]) -> str:
    """
    Cut resume text to ``max_chars`` characters and append an explicit marker.

    ``None`` or a non-positive limit leaves the text untouched.
    """
    if not max_chars or max_chars <= 0 or len(resume_text) <= max_chars:
        return resume_text
    return (
        resume_text[:max_chars]
        + f"\n[... resume truncated: {max_chars} of {len(resume_text)} characters shown ...]"
    )


def build_analysis_prompt_with_report(
    resume_text: str,
    industry: Union[Industry, str],
    keywords: Sequence[str],
    max_chars: Optional[int] = None,
) -> PromptBuildResult:
    """Build the analysis prompt and report whether the resume had to be truncated."""
    body = truncate_resume(resume_text, max_chars)
    truncated = bool(max_chars) and max_chars > 0 and len(resume_text) > max_chars
    industry_name = _industry_name(industry)

    prompt = (
        "You are a professional resume reviewer. "
        f"Return ONLY a valid JSON object matching the {RESULT_SCHEMA_NAME} schema:\n"
        f"{RESULT_SCHEMA}\n"
        "Do not include any explanation, headers, or markdown.\n\n"
        "Evaluate the resume below and generate a comprehensive review "
        f"using the context of the '{industry_name}' industry.\n\n"
        "Resume:\n"
        f"{body}\n\n"
        f"Focus on these keywords: {', '.join(keywords)}"
    )

    return PromptBuildResult(
        prompt=prompt,
        truncated=truncated,
        original_length=len(resume_text),
        included_length=max_chars if truncated else len(resume_text),
    )


def build_analysis_prompt(
    resume_text: str,
    industry: Union[Industry, str],
    keywords: Sequence[str],
    max_chars: Optional[int] = None,
) -> str:
    return build_analysis_prompt_with_report(resume_text, industry, keywords, max_chars).prompt


def _suggestion_line(suggestion: Any) -> Optional[str]:
    if isinstance(suggestion, str):
        return suggestion.strip() or None
    if isinstance(suggestion, dict):
        title = str(suggestion.get("title") or "").strip()
        description = str(suggestion.get("description") or "").strip()
        if title and description:
            return f"{title}: {description}"
        return title or description or None
    return None


def build_optimization_prompt(
    resume_text: str,
    suggestions: Iterable[Any],
    industry: Union[Industry, str],
    keywords: Sequence[str],
) -> str:
    """Prompt asking the model to rewrite a resume applying stored suggestions."""
    lines = [line for line in (_suggestion_line(s) for s in suggestions or []) if line]
    suggestion_block = "\n".join(f"- {line}" for line in lines) or "- Improve clarity and ATS keyword coverage"

    return (
        "You are a professional resume writer. Rewrite the resume below for the "
        f"'{_industry_name(industry)}' industry, applying these improvements:\n"
        f"{suggestion_block}\n\n"
        f"Naturally include relevant keywords where truthful: {', '.join(keywords)}\n"
        "Keep every fact from the original; do not invent employers, dates, or degrees.\n"
        "Return ONLY the rewritten resume as plain text.\n\n"
        "Resume:\n"
        f"{resume_text}"
    )
