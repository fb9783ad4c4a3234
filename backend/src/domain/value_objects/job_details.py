"""
Job Detail Value Objects
Structured requirements and benefits of a job posting
"""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable, List, Optional


@dataclass(frozen=True)
class Requirements:
    """Free-text requirements plus a list of required skills"""

    text: str = ""
    skills: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "skills": list(self.skills)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Requirements":
        data = data or {}
        return cls(text=data.get("text") or "", skills=list(data.get("skills") or []))


@dataclass(frozen=True)
class Benefits:
    """Known benefit flags plus free-text overflow"""

    health_insurance: bool = False
    retirement_plan: bool = False
    flexible_hours: bool = False
    remote_work: bool = False
    paid_time_off: bool = False
    professional_development: bool = False
    other: List[str] = field(default_factory=list)

    @classmethod
    def flag_names(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.name != "other"]

    @classmethod
    def from_slugs(cls, slugs: Iterable[str]) -> "Benefits":
        """
        Build from a list of slugs such as ``health-insurance``

        Known slugs set the matching flag; everything else is kept in
        ``other`` in the order given.
        """
        flags = set(cls.flag_names())
        values: Dict[str, Any] = {}
        other: List[str] = []
        for slug in slugs:
            if not slug or not str(slug).strip():
                continue
            key = str(slug).strip().lower().replace("-", "_").replace(" ", "_")
            if key in flags:
                values[key] = True
            else:
                other.append(str(slug).strip())
        return cls(other=other, **values)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {name: getattr(self, name) for name in self.flag_names()}
        data["other"] = list(self.other)
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Benefits":
        data = data or {}
        values = {name: bool(data.get(name, False)) for name in cls.flag_names()}
        return cls(other=list(data.get("other") or []), **values)
