# worldbuilder/services/skill_service.py
import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.orm import Session, selectinload

from worldbuilder.database import transaction
from worldbuilder.errors import NotFoundError, ValidationError
from worldbuilder.models.skill import MagicBuild, Skill, SpecialAbilityRequirements, SpecialAbilityScaling
from worldbuilder.schemas.skills import (
    MagicBuildOut, MagicBuildSave, RequirementsOut, ScalingOut, SkillChanges, SpecialAbilitySave,
    SpecialAbilitySnapshot,
)

logger = logging.getLogger(__name__)


def summarize_containers(containers_json: str) -> Dict[str, Optional[str]]:
    """
    Derive readable rollups from a spell's container tree.

    The tree is a JSON list of blocks; each block may carry ``range``,
    ``shape``, ``duration``, ``effects`` (``[{name, count}]``), add-on
    increments and nested ``children``. Unparseable input yields all-None.
    """
    rollups: Dict[str, Optional[str]] = {
        "range_text": None, "shape_text": None, "duration_text": None,
        "effects_text": None, "container_breakdown": None, "addons_text": None,
    }
    try:
        blocks = json.loads(containers_json or "[]")
    except (TypeError, ValueError):
        return rollups
    if not isinstance(blocks, list):
        return rollups

    ranges: List[str] = []
    shapes: List[str] = []
    durations: List[str] = []
    effects: List[str] = []
    addons: List[str] = []
    lines: List[str] = []

    def remember(bucket: List[str], value: Any) -> None:
        if value and str(value) not in bucket:
            bucket.append(str(value))

    def walk(node: Any, label: str) -> None:
        if not isinstance(node, dict):
            return
        remember(ranges, node.get("range"))
        remember(shapes, node.get("shape"))
        remember(durations, node.get("duration"))

        for effect in node.get("effects") or []:
            effect = effect if isinstance(effect, dict) else {}
            name = str(effect.get("name") or "?")
            try:
                count = float(effect.get("count", 1) or 0)
            except (TypeError, ValueError):
                count = 1
            effects.append(f"{name} ×{count:g}" if count > 1 else name)

        parts = []
        if node.get("shape"):
            increments = (node.get("addons") or {}).get("shape_increments") or node.get("shape_increments") or 0
            parts.append(f"Shape={node['shape']}(+{increments})")
        if node.get("range"):
            parts.append(f"Range={node['range']}")
        if node.get("duration"):
            parts.append(f"Duration={node['duration']}")
        multi_target = node.get("multi_target") or 0
        if isinstance(multi_target, (int, float)) and multi_target > 0:
            parts.append(f"MultiTarget=+{multi_target:g}")
        if parts:
            addons.append("; ".join(parts))

        lines.append(f"{label} {node.get('container') or 'Target'}")
        for position, child in enumerate(node.get("children") or [], start=1):
            walk(child, f"{label}.{position}")

    for position, block in enumerate(blocks, start=1):
        walk(block, str(position))

    rollups["range_text"] = ", ".join(ranges) or None
    rollups["shape_text"] = ", ".join(shapes) or None
    rollups["duration_text"] = ", ".join(durations) or None
    rollups["effects_text"] = "; ".join(effects) or None
    rollups["container_breakdown"] = "\n".join(lines) or None
    rollups["addons_text"] = "\n".join(addons) or None
    return rollups


class SkillService:
    """Service for skills, saved magic builds and special-ability sheets."""

    def __init__(self, db: Session):
        self.db = db

    def _require_skill(self, skill_id: int) -> Skill:
        skill = self.db.query(Skill).filter(Skill.id == skill_id).first()
        if skill is None:
            raise NotFoundError("Skill not found")
        return skill

    # ---------- skills ----------

    def list_skills(self) -> List[Skill]:
        return self.db.query(Skill).options(selectinload(Skill.created_by)).order_by(Skill.id.desc()).all()

    def get_skill(self, skill_id: int) -> Skill:
        return self._require_skill(skill_id)

    def create_skill(self, values: Dict[str, Any], created_by_id: Optional[str] = None) -> int:
        with transaction(self.db):
            skill = Skill(created_by_id=created_by_id, **values)
            self.db.add(skill)
            self.db.flush()
            skill_id = skill.id
        return skill_id

    def update_skill(self, skill_id: int, patch: SkillChanges) -> bool:
        """Apply a sanitized patch. Returns False when nothing was supplied."""
        changes = patch.model_dump(
            exclude_unset=True, exclude={"parent_id", "parent2_id", "parent3_id"}
        )
        if patch.touches_parents():
            first, second, third = patch.parent_ids(skill_id)
            changes.update(parent_id=first, parent2_id=second, parent3_id=third)
        if not changes:
            return False
        with transaction(self.db):
            updated = self.db.query(Skill).filter(Skill.id == skill_id).update(changes, synchronize_session=False)
            if not updated:
                raise NotFoundError("Skill not found")
        return True

    def delete_skill(self, skill_id: int) -> bool:
        with transaction(self.db):
            deleted = self.db.query(Skill).filter(Skill.id == skill_id).delete(synchronize_session=False)
        return deleted > 0

    # ---------- magic builds ----------

    def save_magic_build(self, build: MagicBuildSave) -> int:
        values = build.model_dump(exclude={"skill_id"})
        values.update(summarize_containers(build.containers_json))
        values["saved_at"] = func.now()
        with transaction(self.db):
            self._require_skill(build.skill_id)
            statement = insert(MagicBuild).values(skill_id=build.skill_id, **values)
            statement = statement.on_conflict_do_update(index_elements=[MagicBuild.skill_id], set_=values)
            self.db.execute(statement)
        logger.info(f"Saved magic build for skill {build.skill_id}")
        return build.skill_id

    def get_magic_build(self, skill_id: int) -> MagicBuildOut:
        row = (
            self.db.query(MagicBuild, Skill.name)
            .join(Skill, Skill.id == MagicBuild.skill_id)
            .filter(MagicBuild.skill_id == skill_id)
            .first()
        )
        if row is None:
            raise NotFoundError("Magic build not found")
        build, skill_name = row
        return MagicBuildOut.model_validate(build).model_copy(update={"skill_name": skill_name})

    # ---------- special abilities ----------

    def save_special_ability(self, sheet: SpecialAbilitySave) -> int:
        skill_id = sheet.skill_id
        if skill_id is None or skill_id <= 0:
            raise ValidationError("skill_id required (int)")
        scaling = sheet.scaling.model_dump(exclude={"skill_id"})
        scaling["saved_at"] = func.now()
        requirements = sheet.requirements.model_dump(exclude={"skill_id"})
        requirements["saved_at"] = func.now()
        with transaction(self.db):
            self._require_skill(skill_id)
            for model, values in ((SpecialAbilityScaling, scaling), (SpecialAbilityRequirements, requirements)):
                statement = insert(model).values(skill_id=skill_id, **values)
                statement = statement.on_conflict_do_update(index_elements=[model.skill_id], set_=values)
                self.db.execute(statement)
        return skill_id

    def get_special_ability(self, skill_id: int) -> SpecialAbilitySnapshot:
        skill = self._require_skill(skill_id)
        scaling = self.db.query(SpecialAbilityScaling).filter(SpecialAbilityScaling.skill_id == skill_id).first()
        requirements = (
            self.db.query(SpecialAbilityRequirements)
            .filter(SpecialAbilityRequirements.skill_id == skill_id)
            .first()
        )
        return SpecialAbilitySnapshot(
            skill_id=skill.id,
            skill_name=skill.name,
            skill_type=skill.type,
            scaling=ScalingOut.model_validate(scaling) if scaling is not None else None,
            requirements=RequirementsOut.model_validate(requirements) if requirements is not None else None,
        )
