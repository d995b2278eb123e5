"""Per-user notification state persisted as a JSON blob on the users row."""

from pydantic import BaseModel, ConfigDict, Field


class UserPreferences(BaseModel):
    """Section badge flags plus read/cleared notification id sets.

    Serialized with the camelCase keys the stored JSON uses.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    queue: bool = False
    received: bool = False
    archive: bool = False
    notifications: bool = False
    read_notification_ids: list[str] = Field(default_factory=list, alias="readNotificationIds")
    cleared_notification_ids: list[str] = Field(
        default_factory=list, alias="clearedNotificationIds"
    )

    def to_storage(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class PreferencesEnvelope(BaseModel):
    preferences: UserPreferences
