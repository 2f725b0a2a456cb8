# apps/goals/domain/entities.py
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Union


class GoalType(str, Enum):
    ACHIEVEMENT = 'achievement'  # osiągnij co najmniej target
    LIMITING = 'limiting'        # nie przekrocz targetu


class MetricType(str, Enum):
    TIME = 'time'    # godziny z logów
    COUNT = 'count'  # suma goal_count


class PeriodType(str, Enum):
    WEEK = 'week'
    MONTH = 'month'
    THREE_MONTHS = '3months'
    SIX_MONTHS = '6months'
    YEAR = 'year'
    CUSTOM = 'custom'


@dataclass
class GoalEntity:
    id: Optional[int]  # ID może być None przed zapisem
    title: str
    goal_type: GoalType
    metric_type: MetricType
    target_value: float
    start_date: date
    end_date: date
    period_type: PeriodType = PeriodType.CUSTOM
    description: str = ""

    # Powiązanie z aktywnością (luźny tekst)
    activity_title: Optional[str] = None
    activity_category: Optional[str] = None

    is_active: bool = True

    # Powtarzanie
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = None
    # {"daysOfWeek": [...]} albo {"dayOfMonth": n}; w bazie bywa stringiem JSON
    recurrence_config: Optional[Union[Dict[str, Any], str]] = None

    # Relacje (tylko ID)
    parent_goal_id: Optional[int] = None
    user_id: Optional[int] = None

    color: Optional[str] = None
    icon: Optional[str] = None


@dataclass
class LogEntity:
    id: Optional[int]
    activity_title: str
    start_time: datetime
    end_time: Optional[datetime] = None  # None = aktywność wciąż trwa
    goal_id: Optional[int] = None
    goal_count: Optional[float] = None
    tags: str = ""
    activity_category: Optional[str] = None
    comment: str = ""

    @property
    def is_running(self) -> bool:
        return self.end_time is None


@dataclass
class GoalProgress:
    """Pola wyliczane - nigdy nie zapisywane, liczone przy każdym odczycie."""
    goal: GoalEntity
    current_value: float
    total_days: int
    elapsed_days: int
    days_remaining: int
    daily_target: float
    current_daily_rate: float
    percent_complete: float
    percent_elapsed: float
    is_completed: bool
    is_overdue: bool
    remaining: float
    required_daily_rate: float
    projected_days_to_completion: float  # math.inf gdy tempo = 0
    projected_completion_date: Optional[datetime] = None

    # Tylko dla celów limitujących: przydział "na dziś" i przekroczenia
    budget_allowance: Optional[float] = None
    is_over_pace: bool = False
    is_limit_exceeded: bool = False

    @property
    def goal_id(self) -> Optional[int]:
        return self.goal.id

    @property
    def is_active(self) -> bool:
        """Aktywny w sensie dashboardu: ani ukończony, ani po terminie."""
        return not self.is_completed and not self.is_overdue

    @property
    def is_behind_pace(self) -> bool:
        """Prognoza wypada po end_date (tylko cele osiągane)."""
        if self.goal.goal_type != GoalType.ACHIEVEMENT or self.is_completed:
            return False
        if self.projected_completion_date is None:
            return True
        return self.projected_completion_date.date() > self.goal.end_date


@dataclass
class PeriodProgress:
    key: str
    start: datetime
    end: datetime
    days: int
    progress: float = 0.0
    target: float = 0.0
    goals_counted: int = 0

    @property
    def percentage(self) -> int:
        if self.target <= 0:
            return 0
        # Zaokrąglenie "połówka w górę", nie bankierskie
        return math.floor(self.progress / self.target * 100 + 0.5)

    @property
    def is_on_track(self) -> bool:
        return self.percentage >= 100


@dataclass
class GoalDashboard:
    now: datetime
    goals: list = field(default_factory=list)      # List[GoalProgress]
    current: dict = field(default_factory=dict)    # key -> PeriodProgress
    historical: dict = field(default_factory=dict)  # key -> PeriodProgress
