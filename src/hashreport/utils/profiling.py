"""Profiling support for hashreport using cProfile.

When the HASHREPORT_PROFILE environment variable is set to a directory path, the
entry point runs under cProfile and the stats are saved to that directory.
"""
import cProfile
import functools
import itertools
import os
from pathlib import Path
from typing import Callable, TypeVar, ParamSpec

P = ParamSpec('P')
T = TypeVar('T')

PROFILE_ENVIRONMENT_VARIABLE = 'HASHREPORT_PROFILE'

# Keeps file names unique when the same process profiles more than once
_profile_counter = itertools.count()


def get_profile_dir() -> Path | None:
    """Return the directory named by HASHREPORT_PROFILE, or None if profiling is off."""
    profile_path = os.environ.get(PROFILE_ENVIRONMENT_VARIABLE)
    if profile_path:
        return Path(profile_path)
    return None


def generate_profile_filename(prefix: str = "profile") -> str:
    """Generate a profile filename unique within this process.

    Returns:
        Filename string like "main_54398_0.prof"
    """
    return f"{prefix}_{os.getpid()}_{next(_profile_counter)}.prof"


def profile_main(func: Callable[P, T]) -> Callable[P, T]:
    """Decorator for the entry point that profiles it if HASHREPORT_PROFILE is set.

    Stats are dumped even when the wrapped function raises or calls sys.exit().
    """
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        profile_dir = get_profile_dir()

        if profile_dir is None:
            return func(*args, **kwargs)

        profile_dir.mkdir(parents=True, exist_ok=True)
        profile_file = profile_dir / generate_profile_filename("main")

        profiler = cProfile.Profile()
        try:
            profiler.enable()
            return func(*args, **kwargs)
        finally:
            profiler.disable()
            profiler.dump_stats(str(profile_file))

    return wrapper
