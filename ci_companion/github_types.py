from __future__ import annotations

import pydantic


class Label(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    name: str


class PullRequest(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    number: int
    body: str | None = None
    labels: list[Label] = pydantic.Field(default_factory=list)


class Release(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    tag_name: str
    draft: bool


class GitObject(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    sha: str
    type: str
    url: str


class GitRef(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    ref: str
    object: GitObject


class Verification(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    verified: bool
    reason: str | None = None


class SignedGitObject(pydantic.BaseModel):
    """A commit or an annotated tag, as returned by the git database API."""

    model_config = pydantic.ConfigDict(extra="ignore")

    sha: str
    verification: Verification | None = None
