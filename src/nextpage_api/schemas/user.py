from pydantic import BaseModel, ConfigDict, Field

DEFAULT_READING_LEVEL = "intermediate"

GenreWeights = dict[str, float]


class UserPreferences(BaseModel):
    favorite_genres: list[str] = Field(
        default_factory=list,
        description="Genres the user likes",
        examples=[["Fantasy", "Mystery"]],
    )
    favorite_authors: list[str] = Field(
        default_factory=list,
        description="Authors the user likes",
        examples=[["Ursula K. Le Guin"]],
    )
    reading_level: str = Field(
        default=DEFAULT_READING_LEVEL,
        description="Preferred reading level",
        examples=["beginner", "intermediate", "advanced"],
    )

    model_config = ConfigDict(from_attributes=True)


class UserPreferencesUpdate(BaseModel):
    favorite_genres: list[str] | None = Field(
        default=None, description="Optional list of favorite genres to update"
    )
    favorite_authors: list[str] | None = Field(
        default=None, description="Optional list of favorite authors to update"
    )
    reading_level: str | None = Field(default=None, description="Optional reading level to update")


class ReadingPattern(BaseModel):
    total_books_read: int = 0
    avg_reading_hours: float = 0.0
    preferred_genre: str = ""
    avg_pages_per_session: float = 0.0
    completed_sessions: int = 0
    abandoned_sessions: int = 0

    model_config = ConfigDict(from_attributes=True)


class UserRead(BaseModel):
    id: str = Field(
        description="Unique internal ID of the user",
        examples=["usr_12345678-1234-5678-1234-567812345678"],
    )
    external_idp_id: str = Field(
        description="External Identity Provider ID", examples=["auth0|123456"]
    )
    preferences: UserPreferences = Field(description="User's reading preferences")


class GenreWeightsUpdate(BaseModel):
    weights: dict[str, float] = Field(
        description="Genre affinity weights; every weight must be positive",
        examples=[{"Fantasy": 2.0, "Mystery": 0.5}],
    )
