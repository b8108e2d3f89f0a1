from typing import Literal

from pydantic import BaseModel, Field, model_validator

HashScheme = Literal["bcrypt", "argon2"]
TokenAlgorithm = Literal["HS256", "HS384", "HS512"]
MatchMode = Literal["any", "all"]


class PasswordHashingRules(BaseModel):
    scheme: HashScheme = "bcrypt"
    # bcrypt cost factor, or argon2 time cost
    rounds: int = Field(default=10, ge=1, le=31)

    @model_validator(mode="after")
    def check_bcrypt_cost(self) -> "PasswordHashingRules":
        if self.scheme == "bcrypt" and self.rounds < 4:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        return self


class TokenRules(BaseModel):
    algorithm: TokenAlgorithm = "HS256"
    ttl_seconds: int = Field(default=3600, gt=0)


class AuthRules(BaseModel):
    password_hashing: PasswordHashingRules = Field(default_factory=PasswordHashingRules)
    tokens: TokenRules = Field(default_factory=TokenRules)


class SearchRules(BaseModel):
    match: MatchMode = "any"
    case_insensitive: bool = True


class Rules(BaseModel):
    auth: AuthRules = Field(default_factory=AuthRules)
    search: SearchRules = Field(default_factory=SearchRules)
