# devfeed/application/dtos/article_dto.py

"""
Schemas for articles and their comments.
"""

from datetime import datetime

from pydantic import Field, field_validator

from devfeed.application.dtos.base_dto import CamelCaseModel
from devfeed.application.dtos.theme_dto import ThemeResponse
from devfeed.shared.utils.input_validation import InputValidator


class ArticleCreate(CamelCaseModel):
    """Payload to publish an article. Also used to replace one."""
    title: str = Field(..., description="Title, at most 200 characters.")
    content: str = Field(..., description="Article body.")
    theme_id: int = Field(..., description="Theme the article is classified under.")

    @field_validator("title")
    def validate_title(cls, v):
        is_valid, error_msg = InputValidator.validate_text(v, "Title", InputValidator.MAX_TITLE_LENGTH)
        if not is_valid:
            raise ValueError(error_msg)
        return v.strip()

    @field_validator("content")
    def validate_content(cls, v):
        is_valid, error_msg = InputValidator.validate_text(v, "Content")
        if not is_valid:
            raise ValueError(error_msg)
        return v


class ArticleResponse(CamelCaseModel):
    id: int
    title: str
    content: str
    author_id: int
    author_username: str
    theme: ThemeResponse
    comments_count: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, article, comments_count: int = 0) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            content=article.content,
            author_id=article.author_id,
            author_username=article.author.username,
            theme=ThemeResponse.model_validate(article.theme),
            comments_count=comments_count,
            created_at=article.created_at,
            updated_at=article.updated_at,
        )


class CommentCreate(CamelCaseModel):
    content: str = Field(..., description="Comment text, at most 2000 characters.")
    article_id: int = Field(..., description="Article being commented.")

    @field_validator("content")
    def validate_content(cls, v):
        is_valid, error_msg = InputValidator.validate_text(v, "Content", InputValidator.MAX_COMMENT_LENGTH)
        if not is_valid:
            raise ValueError(error_msg)
        return v.strip()


class CommentResponse(CamelCaseModel):
    id: int
    content: str
    author_id: int
    username: str
    article_id: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            content=comment.content,
            author_id=comment.author_id,
            username=comment.author.username,
            article_id=comment.article_id,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
