"""Configuration management."""

import copy
import json
import yaml
from pathlib import Path
from typing import Dict, Any, Optional


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file, merged over the defaults."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            overrides = yaml.safe_load(f) or {}
        elif path.suffix.lower() == '.json':
            overrides = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    if not isinstance(overrides, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")

    return merge_config(get_default_config(), overrides)


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``overrides`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_section(config: Optional[Dict[str, Any]], name: str) -> Dict[str, Any]:
    """Return one section of ``config`` with defaults filled in."""
    defaults = get_default_config()[name]
    if not config:
        return defaults
    return merge_config(defaults, config.get(name, {}))


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'time_blocks': {
            'workday_start_hour': 8,
            'workday_end_hour': 18,
            'min_block_minutes': 15,
            'days_to_analyze': 7,
            'max_workers': 4,
        },
        'conflicts': {
            'buffer_minutes': 15,
            'alternative_start_hour': 8,
            'alternative_end_hour': 18,
            'alternative_step_minutes': 30,
            'max_suggestions': 5,
        },
        'find_time': {
            'start_hour': 9,
            'end_hour': 17,
            'slot_interval': 30,
            'exclude_weekends': True,
            'suggest_days': 14,
            'default_working_start': '09:00',
            'default_working_end': '17:00',
        },
        'optimizer': {
            'days_to_search': 7,
            'max_alternatives': 3,
            'rebalance_threshold': 70,
            'preferences': {
                'workday_start': 8,
                'workday_end': 18,
                'preferred_focus_hours': [9, 10, 14, 15],
                'avoid_meeting_hours': [12, 13],  # lunch
                'min_break_between_events': 15,
                'max_consecutive_meetings': 3,
                'prefer_morning_meetings': True,
            },
        },
        'goals': {
            'horizon_days': 14,
            'step_minutes': 30,
            'morning_cutoff_hour': 9,
            'evening_cutoff_hour': 18,
            'default_buffer_minutes': 15,
        },
    }
