ANALYSIS_PROMPT = """You are an expert recruiter and career coach. Analyze the following resume against the job description and provide a detailed analysis in JSON format.

RESUME:
{resume}

JOB DESCRIPTION:
{jd}

Please provide analysis in this exact JSON structure:
{{
  "matchScore": (0-100),
  "matchPercentage": "X%",
  "strengths": [
    {{
      "title": "skill/experience name",
      "description": "why this is a strength",
      "relevance": "how it matches the job"
    }}
  ],
  "weaknesses": [
    {{
      "title": "missing skill/experience",
      "description": "why it's a weakness",
      "impact": "how critical is this for the role",
      "severity": "high/medium/low"
    }}
  ],
  "keywordMissing": ["keyword1", "keyword2"],
  "improvementSuggestions": [
    {{
      "area": "section name",
      "currentIssue": "what's missing or weak",
      "recommendation": "specific action to take",
      "impact": "expected benefit",
      "priority": "high/medium/low"
    }}
  ],
  "hiringChanceAnalysis": {{
    "currentChance": "X%",
    "potentialChance": "Y%",
    "timeToImprove": "estimated time"
  }},
  "resumeOptimizationTips": [
    "tip 1",
    "tip 2"
  ],
  "competitorAdvantage": "What would make you stand out from other candidates",
  "interviewPrep": [
    "question you should prepare for",
    "another question"
  ]
}}

Provide ONLY valid JSON, no additional text."""


def build_prompt(resume_text: str, job_description: str) -> str:
    return ANALYSIS_PROMPT.format(resume=resume_text, jd=job_description)
