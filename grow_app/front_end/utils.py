import os

def show_recent_errors(log_path, n=50):
    """Return the last n lines of the error log, newest first."""
    if not os.path.exists(log_path):
        return ["Log file not found."]
    with open(log_path, 'r') as f:
        lines = f.readlines()
    return [line.rstrip("\n") for line in lines[-n:][::-1]]


def progress_label(progress: int) -> str:
    """Caption shown under a goal's progress bar."""
    if progress >= 100:
        return "Complete"
    return f"{progress}% complete"


def streak_label(streak: int) -> str:
    if streak <= 0:
        return "Start your streak today!"
    return f"🔥 {streak} day streak"


def sort_challenges(challenges):
    """Open challenges first; the order within each group is kept."""
    return sorted(challenges, key=lambda ch: bool(ch.get("completed")))
