# apps/goals/domain/services/__init__.py
from .progress import GoalProgressCalculator, compute_progress, compute_progress_for_goals
from .rollup import PeriodRollupAggregator, compute_historical_progress, compute_period_progress
from .periods import compute_end_date, validate_goal
