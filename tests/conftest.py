import copy
import pytest

SAMPLE_ANALYSIS = {
    "matchScore": 72,
    "matchPercentage": "72%",
    "strengths": [{"title": "Python", "description": "5 years of Python", "relevance": "Core requirement"}],
    "weaknesses": [{"title": "Kubernetes", "description": "No k8s experience", "impact": "Nice to have", "severity": "Medium"}],
    "keywordMissing": ["Kubernetes", "Terraform"],
    "improvementSuggestions": [{
        "area": "Experience",
        "currentIssue": "No metrics",
        "recommendation": "Quantify impact",
        "impact": "Stronger bullets",
        "priority": "HIGH",
    }],
    "hiringChanceAnalysis": {"currentChance": "40%", "potentialChance": "65%", "timeToImprove": "2 weeks"},
    "resumeOptimizationTips": ["Lead with results"],
    "competitorAdvantage": "Open-source contributions",
    "interviewPrep": ["Describe a production incident you handled"],
}


@pytest.fixture
def analysis_payload():
    """A complete model answer, as parsed JSON."""
    return copy.deepcopy(SAMPLE_ANALYSIS)
