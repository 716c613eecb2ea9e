"""Classes for working with team match data"""

from typing import List, Optional, Sequence, Tuple
import numpy as np
import polars as pl
from teamglicko.exceptions import ConfigurationError

Team = Tuple[str, ...]


class TeamMatchDataset:
    """
    Team vs team results grouped into rating periods.

    The periods come from a time step column in the data, the dataset never
    decides on its own where one period ends.
    """

    def __init__(
        self,
        df: pl.DataFrame,
        team_a_cols: List[str],
        team_b_cols: List[str],
        outcome_col: str,
        time_step_col: str,
        verbose: bool = True,
    ):
        """
        Parameters:
            df (pl.DataFrame): one row per game, sorted by time step
            team_a_cols (list): columns naming the players of team a, nulls are skipped so teams can be uneven
            team_b_cols (list): columns naming the players of team b
            outcome_col (str): 1.0, 0.0 or 0.5 from team a's point of view
            time_step_col (str): integer rating period of each row
            verbose (bool): print some stats about the loaded data
        """
        self.team_a = self._collect_teams(df, team_a_cols)
        self.team_b = self._collect_teams(df, team_b_cols)
        self.outcomes = df[outcome_col].cast(pl.Float64).to_numpy()
        self.time_steps = df[time_step_col].to_numpy()
        self._init_competitors()
        self._process_time_steps()

        if verbose:
            self._print_stats()

    @staticmethod
    def _collect_teams(df: pl.DataFrame, cols: List[str]) -> List[Team]:
        rows = df.select([pl.col(col).cast(pl.Utf8) for col in cols]).rows()
        return [tuple(name for name in row if name is not None) for row in rows]

    def _init_competitors(self):
        names = {name for team in self.team_a + self.team_b for name in team}
        self.competitors = sorted(names)
        self.num_competitors = len(self.competitors)

    def _process_time_steps(self):
        """Calculate time period boundaries."""
        if not len(self.team_a) == len(self.team_b) == len(self.outcomes) == len(self.time_steps):
            raise ConfigurationError('team_a, team_b, outcomes and time_steps must be of equal size')
        if np.any(np.diff(self.time_steps) < 0):
            raise ConfigurationError('rows must be sorted by time step')
        self.unique_time_steps, time_indices = np.unique(self.time_steps, return_index=True)
        self.time_step_end_idxs = np.roll(time_indices, -1)
        if len(self.time_step_end_idxs) > 0:
            self.time_step_end_idxs[-1] = len(self.time_steps)

    def _print_stats(self):
        print('Loaded dataset with:')
        print(f'{len(self)} games')
        print(f'{self.num_competitors} unique competitors')
        print(f'{len(self.unique_time_steps)} rating periods')

    def __len__(self):
        return len(self.outcomes)

    def __iter__(self):
        """Iterate through rating periods."""
        start_idx = 0
        for time_step, end_idx in zip(self.unique_time_steps, self.time_step_end_idxs):
            matchups = list(zip(self.team_a[start_idx:end_idx], self.team_b[start_idx:end_idx]))
            yield matchups, self.outcomes[start_idx:end_idx], time_step
            start_idx = end_idx

    @classmethod
    def init_from_arrays(
        cls,
        team_a: Sequence[Sequence[str]],
        team_b: Sequence[Sequence[str]],
        outcomes: np.ndarray,
        time_steps: Optional[np.ndarray] = None,
    ):
        """Factory method for creating datasets without a DataFrame, all rows share one period by default."""
        dataset = cls.__new__(cls)
        dataset.team_a = [tuple(team) for team in team_a]
        dataset.team_b = [tuple(team) for team in team_b]
        dataset.outcomes = np.asarray(outcomes, dtype=np.float64)
        if time_steps is None:
            time_steps = np.zeros(len(dataset.outcomes), dtype=np.int64)
        dataset.time_steps = np.asarray(time_steps)
        dataset._init_competitors()
        dataset._process_time_steps()
        return dataset
