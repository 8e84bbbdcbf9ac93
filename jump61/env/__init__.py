"""Gymnasium environment wrapper for Jump61."""

from .gym_env import Jump61Env

__all__ = ["Jump61Env"]
