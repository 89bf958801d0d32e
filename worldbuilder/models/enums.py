# worldbuilder/models/enums.py
import enum


class UserRole(str, enum.Enum):
    FREE = "free"
    ADMIN = "admin"
    WORLDBUILDER = "worldbuilder"
    DEVELOPER = "developer"
    PRIVILEGED = "privileged"


class SkillType(str, enum.Enum):
    STANDARD = "standard"
    MAGIC = "magic"
    SPHERE = "sphere"
    DISCIPLINE = "discipline"
    RESONANCE = "resonance"
    SPELL = "spell"
    PSIONIC_SKILL = "psionic skill"
    REVERBERATION = "reverberation"
    SPECIAL_ABILITY = "special ability"


class Attribute(str, enum.Enum):
    STR = "STR"
    DEX = "DEX"
    CON = "CON"
    INT = "INT"
    WIS = "WIS"
    CHA = "CHA"
    NA = "NA"


class CatalogKind(str, enum.Enum):
    """Named lore entries an era can list alongside its races and creatures."""
    LANGUAGE = "language"
    DEITY = "deity"
    FACTION = "faction"
