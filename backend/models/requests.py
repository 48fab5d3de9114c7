from pydantic import BaseModel, Field


class TextAnalyzeRequest(BaseModel):
    resume_text: str = Field(..., max_length=100000, description="Plain text resume content")
    tone: str | None = Field(None, description="mild | balanced | brutal")
    language: str | None = Field(None, description="english | hindi | hinglish")
    style: str | None = Field(None, description="funny | serious | sarcastic | motivational")
    audience: str | None = Field(None, description="male | female | other")

    def config_values(self) -> dict[str, str | None]:
        return {
            "tone": self.tone,
            "language": self.language,
            "style": self.style,
            "audience": self.audience,
        }
