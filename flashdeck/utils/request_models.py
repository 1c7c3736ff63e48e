from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from flashdeck.utils.types import Flashcard, FlashcardDraft


class FlashcardDraftIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    word: str = Field("", description="Vocabulary item")
    definition: str = Field("", description="Meaning of the word")
    example_sentence: str | None = Field(None, alias="exampleSentence", description="Optional usage example")

    def to_draft(self) -> FlashcardDraft:
        return FlashcardDraft(
            word=self.word.strip(),
            definition=self.definition.strip(),
            example_sentence=self.example_sentence,
        )


class FlashcardIn(BaseModel):
    # Stored records must render as strict JSON, so Infinity/NaN are rejected.
    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    id: str = Field(..., description="Card id; must match the path id")
    word: str
    definition: str
    example_sentence: str | None = Field(None, alias="exampleSentence")
    created_at: int = Field(..., alias="createdAt", description="Creation time, epoch ms")
    last_reviewed_at: int | float | None = Field(None, alias="lastReviewedAt")
    due_date: int | float | None = Field(None, alias="dueDate")
    interval: int | float | None = Field(None, ge=0, description="Days until the next review")

    @field_validator("word", "definition")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_card(self) -> Flashcard:
        return Flashcard(
            id=self.id,
            word=self.word,
            definition=self.definition,
            example_sentence=self.example_sentence,
            created_at=self.created_at,
            last_reviewed_at=self.last_reviewed_at,
            due_date=self.due_date,
            interval=self.interval,
        )


class DefinitionRequest(BaseModel):
    word: str = Field("", description="Word to define")


class SuggestionsRequest(BaseModel):
    count: int = Field(3, ge=1, le=20, description="Number of words to suggest")
    theme: str | None = Field(None, description="Optional theme for the suggestions")


__all__ = ["DefinitionRequest", "FlashcardDraftIn", "FlashcardIn", "SuggestionsRequest"]
