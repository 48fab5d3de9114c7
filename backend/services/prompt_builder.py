"""Prompt template for the Gemini resume roast call."""

import logging
from dataclasses import dataclass

from config import settings
from models.schemas.analysis_config import AnalysisConfig

logger = logging.getLogger(__name__)

# Break points are only accepted past this fraction of the limit
BREAK_POINT_MIN_RATIO = 0.85


@dataclass(frozen=True)
class RoastVoice:
    tone: str
    persona: str
    intensity: str
    greeting: str
    register: str


ROAST_MATRIX: dict[tuple[str, str], RoastVoice] = {
    ("mild", "english"): RoastVoice(
        tone="gentle, encouraging, and supportive",
        persona="like a caring mentor who wants to help you succeed",
        intensity="mild constructive criticism wrapped in positivity and encouragement",
        greeting="Hey there! Let me take a loving look at your resume...",
        register="supportive and nurturing approach",
    ),
    ("mild", "hindi"): RoastVoice(
        tone="प्यार से, सहायक, और प्रेरणादायक",
        persona="एक देखभाल करने वाले गुरु की तरह जो आपकी सफलता चाहता है",
        intensity="हल्की सलाह के साथ बहुत सारी प्रशंसा और प्रेरणा",
        greeting="अरे वाह! आपका resume देखते हैं प्यार से...",
        register="भारतीय पारिवारिक प्रेम के साथ",
    ),
    ("mild", "hinglish"): RoastVoice(
        tone="pyaar se, helpful, aur motivating",
        persona="ek caring elder sibling ki tarah jo genuinely help karna chahta hai",
        intensity="thoda sa honest feedback but mostly encouragement aur positivity",
        greeting="Arre {address}! Chaliye dekhtein hain aapka resume pyaar se...",
        register="desi sibling warmth with motivation",
    ),
    ("balanced", "english"): RoastVoice(
        tone="balanced, honest, and constructively critical",
        persona="like a professional career counselor who gives fair assessments",
        intensity="balanced mix of genuine praise and honest areas for improvement",
        greeting="Let me give you an honest, professional assessment of your resume...",
        register="professional but approachable tone",
    ),
    ("balanced", "hindi"): RoastVoice(
        tone="संतुलित, ईमानदार, और रचनात्मक आलोचना",
        persona="एक अनुभवी करियर सलाहकार की तरह जो सच्चाई बताता है",
        intensity="प्रशंसा और सुधार के क्षेत्रों का अच्छा संतुलन",
        greeting="आइए आपके resume का ईमानदार और संतुलित विश्लेषण करते हैं...",
        register="व्यावसायिक लेकिन सम्मानजनक तरीके से",
    ),
    ("balanced", "hinglish"): RoastVoice(
        tone="balanced, seedha-saadha, aur constructive",
        persona="ek experienced career advisor ki tarah jo sach bolne mein believe karta hai",
        intensity="achhi bhi baat bolenge, improvement areas bhi clearly batayenge",
        greeting="Chaliye aapke resume ka seedha-saadha analysis karte hain...",
        register="professional but desi approach with straight talk",
    ),
    ("brutal", "english"): RoastVoice(
        tone="brutally honest, savage, and unfiltered",
        persona="like a no-nonsense hiring manager who has seen thousands of resumes",
        intensity="harsh but constructive roasting with sharp wit and brutal honesty",
        greeting="Alright, let me absolutely roast your resume... I mean, analyze it thoroughly.",
        register="direct and uncompromising feedback style",
    ),
    ("brutal", "hindi"): RoastVoice(
        tone="बेरहमी से ईमानदार, कठोर, और बिना फिल्टर",
        persona="एक सख्त HR मैनेजर की तरह जिसने हजारों resume देखे हैं",
        intensity="कड़ी लेकिन उपयोगी आलोचना तेज़ बुद्धि और सच्चाई के साथ",
        greeting="ठीक है {address}, अब सच्चाई बताते हैं आपके resume के बारे में...",
        register="typical desi uncle/aunty style brutal honesty",
    ),
    ("brutal", "hinglish"): RoastVoice(
        tone="bilkul seedha, savage, aur unfiltered",
        persona="ek typical desi HR uncle/aunty ki tarah jo sach bol dete hain bina kisi hesitation ke",
        intensity="proper roasting with desi tadka, sharp comments aur brutal honesty",
        greeting="Arre {address}, ab batata hun ki aapke resume mein kya ghotala hai...",
        register="full desi roasting style with cultural references and no-holds-barred feedback",
    ),
}

CULTURAL_CONTEXT: dict[str, str] = {
    "english": "international professional standards and global hiring practices",
    "hindi": "भारतीय कॉर्पोरेट संस्कृति और देसी नौकरी बाजार की समझ",
    "hinglish": "Indian corporate culture mixed with modern global practices, understanding desi job market dynamics",
}

BRUTAL_CONTEXT_SUFFIX: dict[str, str] = {
    "english": " with direct, no-nonsense feedback approach",
    "hindi": " के साथ सीधी-सादी और बेबाक सच्चाई",
    "hinglish": " with typical desi uncle/aunty brutally honest style",
}

STYLE_WORDING: dict[str, str] = {
    "funny": "witty and humorous, with light jokes that never hide the real advice",
    "serious": "serious and matter-of-fact",
    "sarcastic": "dry and sarcastic, but every jab must point at a concrete fix",
    "motivational": "motivational, ending each point with what the candidate can achieve",
}

# How the greeting addresses the candidate
AUDIENCE_ADDRESS: dict[str, str] = {
    "male": "bhai",
    "female": "behen",
    "other": "dost",
}


def truncate_resume_text(text: str, max_chars: int | None = None) -> str:
    """Cut text to ``max_chars`` at the best natural break point.

    Break points are tried in order: paragraph break, sentence end, line
    break, word boundary. One is accepted only if it lies beyond 85% of the
    limit; otherwise the text is hard-cut at the limit.
    """
    limit = max_chars or settings.max_prompt_chars
    if not text or len(text) <= limit:
        return text

    truncated = text[:limit]
    for separator in ("\n\n", ". ", "\n", " "):
        break_point = truncated.rfind(separator)
        if break_point > limit * BREAK_POINT_MIN_RATIO:
            if separator == ". ":
                # keep the full stop
                break_point += 1
            shown = round(break_point / len(text) * 100)
            logger.info(
                "Resume text truncated at break point: %d -> %d chars (%d%% shown)",
                len(text), break_point, shown,
            )
            return (
                truncated[:break_point]
                + f"\n\n[Resume content truncated for analysis - showing first {shown}% of content]"
            )

    logger.info("Resume text truncated at character limit: %d -> %d chars", len(text), limit)
    return truncated + "\n\n[Resume content truncated for analysis]"


def cultural_context(config: AnalysisConfig) -> str:
    context = CULTURAL_CONTEXT[config.language]
    if config.tone == "brutal":
        context += BRUTAL_CONTEXT_SUFFIX[config.language]
    return context


def build_analysis_prompt(resume_text: str, config: AnalysisConfig) -> str:
    """Single call: roast feedback, scoring and full structured extraction."""
    voice = ROAST_MATRIX[(config.tone, config.language)]
    greeting = voice.greeting.format(address=AUDIENCE_ADDRESS[config.audience])
    style = STYLE_WORDING[config.style]
    text = truncate_resume_text(resume_text)

    if config.tone == "brutal" and config.language != "english":
        language_rule = (
            'Feel free to use mild authentic expressions (like "yaar", "arre") '
            "for cultural authenticity, but keep it constructive"
        )
    else:
        language_rule = "Maintain professional language"

    return f"""You are an expert resume reviewer and comprehensive data extraction specialist with deep understanding of {cultural_context(config)}. Your task is to provide detailed feedback AND extract ALL information from this resume.

RESUME CONTENT:
---
{text}
---

ANALYSIS CONFIGURATION:
- Tone: {voice.tone}
- Persona: {voice.persona}
- Intensity: {voice.intensity}
- Language: {config.language}
- Style: {style}
- Cultural register: {voice.register}

REQUIREMENTS:

1. FEEDBACK:
- Start with: "{greeting}"
- Write 4-5 detailed paragraphs of feedback in {config.language}
- Be {voice.tone} throughout, {style}
- Include specific examples from the resume
- {language_rule}

2. DATA EXTRACTION:
- Extract every piece of information actually present in the resume
- Never invent information; use null for missing values and [] for missing lists

3. SCORING:
- Score from 0-100 based on formatting, content, completeness and professionalism

Respond with ONLY valid JSON (no markdown, no code fences, no prose before or after) in this exact structure:
{{
  "feedback": "<4-5 paragraphs of feedback>",
  "score": <integer 0-100>,
  "strengths": [<3-6 specific strengths>],
  "weaknesses": [<3-5 specific weaknesses>],
  "improvements": [
    {{
      "priority": "<high | medium | low>",
      "title": "<short improvement title>",
      "description": "<what needs to change>",
      "example": "<a concrete rewrite or suggestion>"
    }}
  ],
  "extracted_info": {{
    "personal_info": {{
      "name": "<full name or null>",
      "email": "<email or null>",
      "phone": "<phone or null>",
      "address": {{"full": null, "city": null, "state": null, "country": null, "zip_code": null}},
      "social_profiles": {{"linkedin": null, "github": null, "portfolio": null, "website": null, "twitter": null}}
    }},
    "professional_summary": "<summary/objective text or null>",
    "skills": {{
      "technical": [], "soft": [], "languages": [], "tools": [], "frameworks": []
    }},
    "experience": [
      {{"title": "", "company": "", "location": "", "start_date": "", "end_date": "", "duration": "",
        "description": "", "achievements": [], "technologies": []}}
    ],
    "education": [
      {{"degree": "", "field": "", "institution": "", "location": "", "graduation_year": "", "gpa": null,
        "honors": [], "coursework": []}}
    ],
    "certifications": [
      {{"name": "", "issuer": "", "date_obtained": "", "expiration_date": null, "credential_id": null, "url": null}}
    ],
    "projects": [
      {{"name": "", "description": "", "role": "", "duration": "", "technologies": [], "achievements": [],
        "url": null, "github": null}}
    ],
    "awards": [{{"title": "", "issuer": "", "date": "", "description": ""}}],
    "publications": [{{"title": "", "type": "", "date": "", "description": "", "url": null}}],
    "volunteer_work": [{{"organization": "", "role": "", "duration": "", "description": ""}}],
    "interests": [],
    "references": "<Available upon request / Provided / Not mentioned>"
  }},
  "resume_analytics": {{
    "word_count": <integer>,
    "page_count": <integer>,
    "section_count": <integer>,
    "bullet_point_count": <integer>,
    "quantifiable_achievements": <integer>,
    "action_verbs_used": <integer>,
    "industry_keywords": [],
    "readability_score": <integer 0-100>,
    "ats_compatibility": "<High | Medium | Low>",
    "missing_elements": [],
    "strong_elements": []
  }},
  "contact_validation": {{
    "has_email": <bool>, "has_phone": <bool>, "has_linkedin": <bool>, "has_address": <bool>,
    "email_valid": <bool>, "phone_valid": <bool>, "linkedin_valid": <bool>
  }}
}}

CRITICAL: Return ONLY the JSON object. No markdown formatting, no explanations."""
