from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class PluginRules(BaseModel):
    component: str = "facetoface"
    lang: str = "en"

class DisplayRules(BaseModel):
    timezone: str = "Europe/London"
    date_format: str = "%d %B %Y"
    time_format: str = "%I:%M %p"
    pix_base_url: str = "/pix"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

class SessionListRules(BaseModel):
    table_class: str = "f2fsessionlist"
    customfield_delimiter: str = "##SEPARATOR##"

class CapabilityRules(BaseModel):
    viewattendees: list[str] = Field(default_factory=list)
    editsessions: list[str] = Field(default_factory=list)
    configure: list[str] = Field(default_factory=lambda: ["manager"])

    def grants(self, capability: str, role: str) -> bool:
        if capability not in type(self).model_fields:
            return False
        return role in getattr(self, capability)

class Rules(BaseModel):
    plugin: PluginRules = Field(default_factory=PluginRules)
    display: DisplayRules = Field(default_factory=DisplayRules)
    session_list: SessionListRules = Field(default_factory=SessionListRules)
    capabilities: CapabilityRules = Field(default_factory=CapabilityRules)
