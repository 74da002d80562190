"""Utility helpers."""

from gptcall.utils.env import load_project_dotenv

__all__ = ["load_project_dotenv"]
