"""Score and session high score."""

from dataclasses import dataclass


@dataclass
class ScoreTracker:
    """
    Running score of the current game and best score of the session.

    The high score follows the score every time it changes and never decreases; ``reset`` only clears
    the current score.
    """

    score: int = 0
    high_score: int = 0

    def add(self, gain: int) -> int:
        """
        Add the gain of a move.

        Parameters
        ----------
        gain : int
            Sum of the values created by merges; must not be negative.

        Returns
        -------
        int
            The new score.
        """
        if gain < 0:
            raise ValueError(f'gain must be >= 0, got {gain}')
        self.score += gain
        self.high_score = max(self.high_score, self.score)
        return self.score

    def reset(self):
        self.score = 0
