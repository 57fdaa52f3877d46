from pydantic import BaseModel, Field, field_validator

# Допустимые сроки жизни заметки, в днях
ALLOWED_EXPIRES = (1, 7, 365)


class SnippetCreate(BaseModel):
    """Схема формы создания заметки"""
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1)
    expires: int = 7

    @field_validator('title', 'content')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Field cannot be blank')
        return v.strip()

    @field_validator('expires')
    @classmethod
    def validate_expires(cls, v):
        if v not in ALLOWED_EXPIRES:
            raise ValueError(f'Expires must be one of {ALLOWED_EXPIRES}')
        return v
