# -*- coding: utf-8 -*-
"""
This module provides persistence helpers: saving and resuming games and keeping high scores.
"""

from .storage import GAME_STATE_KEY, GAME_STATS_KEY, GameStats, GameStorage, HighScoreEntry

__all__ = ["GAME_STATE_KEY", "GAME_STATS_KEY", "GameStats", "GameStorage", "HighScoreEntry"]
