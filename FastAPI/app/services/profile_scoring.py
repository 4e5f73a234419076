from typing import Any

NAME_WEIGHT = 20
PHONE_WEIGHT = 15
NATIONALITY_WEIGHT = 15
CV_WEIGHT = 50
MAX_COMPLETION = 100


def profile_completion(profile) -> int:
    """Fixed-weight completion score for an applicant profile, 0..100."""
    score = 0
    if profile.first_name and profile.last_name:
        score += NAME_WEIGHT
    if profile.phone:
        score += PHONE_WEIGHT
    if profile.nationality:
        score += NATIONALITY_WEIGHT
    cv = profile.ai_generated_cv
    if isinstance(cv, dict) and len(cv) > 0:
        score += CV_WEIGHT
    return min(MAX_COMPLETION, score)


def match_score(profile, job_order=None) -> int:
    """Placeholder until a matching model exists; always 0."""
    return 0


def cv_document(profile) -> dict[str, Any]:
    cv = getattr(profile, "ai_generated_cv", None)
    return dict(cv) if isinstance(cv, dict) else {}


def generate_cv(profile) -> dict[str, Any]:
    """
    Stand-in for the AI CV builder: fills cvSummary/skillTags/profileReady from
    what the applicant already entered. No model is called.
    """
    existing = cv_document(profile)
    name = " ".join(p for p in (profile.first_name, profile.last_name) if p) or "Applicant"
    summary = existing.get("summary") or f"Professional profile for {name}."
    return {
        **existing,
        "cvSummary": summary,
        "skillTags": existing.get("skillTags") or existing.get("skills") or [],
        "profileReady": True,
    }


def experience_label(cv: dict[str, Any]) -> str:
    entries = cv.get("experience") or []
    return f"{len(entries)}+ years" if entries else "—"
