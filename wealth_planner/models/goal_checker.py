"""
Financial goal tracking.

Goals are checked against net worth, savings rate and outstanding debt.
Net-worth and savings-rate goals are met at or above their target; debt goals
at or below it. A goal that has been met stays met and is not re-evaluated.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from .entities import WealthProjection

logger = logging.getLogger(__name__)

GoalType = Literal["net_worth", "savings_rate", "debt_balance"]


class Goal(BaseModel):
    """A tracked financial goal."""

    id: str = Field(..., description="Goal identifier")
    name: str = Field(..., min_length=1, description="Goal name")
    type: GoalType = Field(..., description="Metric the goal tracks")
    target_value: float = Field(..., description="Value that satisfies the goal")
    current_value: float = Field(default=0.0, description="Last observed value")
    achieved: bool = Field(default=False)
    achieved_date: Optional[datetime] = Field(default=None)
    email_notification: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class GoalAlert(BaseModel):
    """Notification raised when a goal is achieved."""

    goal_id: str
    goal_name: str
    message: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class GoalChecker:
    """Holds goals and raises alerts as they are achieved."""

    def __init__(self, on_goal_achieved: Optional[Callable[[Goal], None]] = None):
        self._goals: Dict[str, Goal] = {}
        self._alerts: List[GoalAlert] = []
        self.on_goal_achieved = on_goal_achieved

    def add_goal(
        self,
        name: str,
        type: GoalType,
        target_value: float,
        email_notification: bool = False,
    ) -> str:
        goal_id = f"goal_{uuid.uuid4().hex[:12]}"
        self._goals[goal_id] = Goal(
            id=goal_id,
            name=name,
            type=type,
            target_value=target_value,
            email_notification=email_notification,
        )
        return goal_id

    def update_goal(self, goal_id: str, **updates) -> None:
        goal = self._goals.get(goal_id)
        if goal is not None:
            self._goals[goal_id] = Goal.model_validate({**goal.model_dump(), **updates})

    def delete_goal(self, goal_id: str) -> None:
        self._goals.pop(goal_id, None)

    def get_all_goals(self) -> List[Goal]:
        return list(self._goals.values())

    def check_goals(
        self, net_worth: float, savings_rate: float, total_debt: float
    ) -> List[GoalAlert]:
        """
        Evaluate every open goal against the latest figures.

        Returns:
            Alerts for goals achieved by this check
        """
        new_alerts = []

        for goal in self._goals.values():
            if goal.achieved:
                continue

            if goal.type == "net_worth":
                goal.current_value = net_worth
                achieved = net_worth >= goal.target_value
            elif goal.type == "savings_rate":
                goal.current_value = savings_rate
                achieved = savings_rate >= goal.target_value
            else:
                goal.current_value = total_debt
                achieved = total_debt <= goal.target_value

            if not achieved:
                continue

            goal.achieved = True
            goal.achieved_date = datetime.utcnow()
            alert = GoalAlert(
                goal_id=goal.id,
                goal_name=goal.name,
                message=f"Congratulations! You've achieved your goal: {goal.name}",
            )
            self._alerts.append(alert)
            new_alerts.append(alert)
            logger.info("Goal %s achieved", goal.id)

            if self.on_goal_achieved is not None:
                self.on_goal_achieved(goal)

        return new_alerts

    def check_goals_against_projection(
        self, projections: Sequence[WealthProjection]
    ) -> List[GoalAlert]:
        """Check goals against the final year of a projection."""
        if not projections:
            return []
        final = projections[-1]
        savings_rate = (
            final.savings / final.gross_income * 100 if final.gross_income > 0 else 0.0
        )
        return self.check_goals(
            net_worth=final.cumulative_wealth,
            savings_rate=savings_rate,
            total_debt=final.loan_balance,
        )

    def get_recent_alerts(self, limit: int = 10) -> List[GoalAlert]:
        return sorted(self._alerts, key=lambda a: a.timestamp, reverse=True)[:limit]

    def clear_alert(self, goal_id: str) -> None:
        self._alerts = [a for a in self._alerts if a.goal_id != goal_id]
