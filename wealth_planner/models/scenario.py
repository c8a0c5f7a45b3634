"""
Scenario registry for what-if planning.

A scenario is a named snapshot of the complete forecast input set. Scenarios
are independent: every scenario holds its own deep copy of its data and
getters hand out copies, so editing one scenario never leaks into another or
into a copy captured earlier.

The registry is an explicitly constructed object; create one per application
or per test rather than sharing a module-level instance.
"""

import json
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from deepdiff import DeepDiff
from pydantic import BaseModel, ConfigDict, Field

from .entities import ScenarioData

logger = logging.getLogger(__name__)

BASE_SCENARIO_ID = "base"


class Scenario(BaseModel):
    """A named bundle of forecast inputs."""

    model_config = ConfigDict(json_encoders={datetime: lambda v: v.isoformat()})

    id: str = Field(..., min_length=1, description="Scenario identifier")
    name: str = Field(..., min_length=1, description="Scenario name")
    is_default: bool = Field(default=False, description="Default scenarios can't be deleted")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    data: ScenarioData = Field(default_factory=ScenarioData)


def default_scenario_data() -> ScenarioData:
    """Inputs of the seeded base case."""
    return ScenarioData(
        initial_wealth=50000,
        investment_return=7,
        projection_years=10,
        state="California",
        filing_status="single",
    )


def _field_name_map() -> Dict[str, str]:
    """Map both aliases and field names of ``ScenarioData`` to field names."""
    names = {}
    for name, field in ScenarioData.model_fields.items():
        names[name] = name
        if field.alias:
            names[field.alias] = name
    return names


class ScenarioService:
    """In-memory scenario registry with a current-scenario pointer."""

    def __init__(self, base_data: Optional[ScenarioData] = None):
        self.logger = logging.getLogger(__name__)
        self._scenarios: Dict[str, Scenario] = {}
        self._current_id = BASE_SCENARIO_ID
        self._initialize_default_scenarios(base_data or default_scenario_data())

    def _initialize_default_scenarios(self, base_data: ScenarioData) -> None:
        base = Scenario(
            id=BASE_SCENARIO_ID,
            name="Base Case",
            is_default=True,
            data=base_data.model_copy(deep=True),
        )
        optimistic = Scenario(
            id="optimistic",
            name="Optimistic",
            data=base_data.model_copy(
                update={"investment_return": 10.0, "debts": []}, deep=True
            ),
        )
        bear = Scenario(
            id="bear",
            name="Bear Case",
            data=base_data.model_copy(
                update={"investment_return": 4.0, "debts": []}, deep=True
            ),
        )
        for scenario in (base, optimistic, bear):
            self._scenarios[scenario.id] = scenario

    @property
    def current_scenario_id(self) -> str:
        return self._current_id

    def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        """Return a copy of a scenario, or None if it doesn't exist."""
        scenario = self._scenarios.get(scenario_id)
        if scenario is None:
            return None
        return scenario.model_copy(deep=True)

    def get_current_scenario(self) -> Scenario:
        return self._scenarios[self._current_id].model_copy(deep=True)

    def set_current_scenario(self, scenario_id: str) -> None:
        """Switch the current scenario; unknown ids are ignored."""
        if scenario_id in self._scenarios:
            self._current_id = scenario_id
        else:
            self.logger.debug("Ignoring switch to unknown scenario %s", scenario_id)

    def get_all_scenarios(self) -> List[Scenario]:
        return [s.model_copy(deep=True) for s in self._scenarios.values()]

    def create_scenario(self, name: str, base_scenario_id: Optional[str] = None) -> str:
        """
        Create a scenario branched from another.

        Args:
            name: Display name for the new scenario
            base_scenario_id: Scenario to copy; the current scenario if omitted
                or unknown

        Returns:
            The new scenario's id
        """
        base = self._scenarios.get(base_scenario_id or self._current_id)
        if base is None:
            base = self._scenarios[self._current_id]

        scenario_id = f"scenario_{uuid.uuid4().hex[:12]}"
        self._scenarios[scenario_id] = Scenario(
            id=scenario_id, name=name, data=base.data.model_copy(deep=True)
        )
        self.logger.info("Created scenario %s from %s", scenario_id, base.id)
        return scenario_id

    def update_scenario(self, scenario_id: str, data: Dict[str, Any]) -> None:
        """
        Merge a partial set of inputs into a scenario.

        Keys may use field names or their camelCase aliases. Unknown scenario
        ids are ignored; invalid values raise ``pydantic.ValidationError``.
        """
        scenario = self._scenarios.get(scenario_id)
        if scenario is None:
            self.logger.debug("Ignoring update of unknown scenario %s", scenario_id)
            return

        names = _field_name_map()
        merged = scenario.data.model_dump()
        for key, value in data.items():
            merged[names.get(key, key)] = value

        self._scenarios[scenario_id] = scenario.model_copy(
            update={"data": ScenarioData.model_validate(merged)}
        )

    def delete_scenario(self, scenario_id: str) -> bool:
        """Delete a non-default scenario. Returns whether anything was removed."""
        scenario = self._scenarios.get(scenario_id)
        if scenario is None or scenario.is_default:
            return False

        del self._scenarios[scenario_id]
        if self._current_id == scenario_id:
            self._current_id = BASE_SCENARIO_ID
        return True

    def compare_scenarios(self, scenario_id_1: str, scenario_id_2: str) -> Dict[str, Any]:
        """
        Compare the inputs of two scenarios using DeepDiff.

        Raises:
            KeyError: If either scenario doesn't exist
        """
        scenario_1 = self._scenarios.get(scenario_id_1)
        scenario_2 = self._scenarios.get(scenario_id_2)
        if scenario_1 is None or scenario_2 is None:
            missing = scenario_id_1 if scenario_1 is None else scenario_id_2
            raise KeyError(f"Scenario {missing} not found")

        diff = DeepDiff(
            scenario_1.data.model_dump(mode="json"),
            scenario_2.data.model_dump(mode="json"),
            ignore_order=True,
        )

        return {
            "scenario_1": scenario_id_1,
            "scenario_2": scenario_id_2,
            "changes": json.loads(diff.to_json()) if diff else {},
            "has_changes": bool(diff),
        }
