"""Session orchestration for collecting and submitting documents."""
from intake.session.controller import SessionController, success_title

__all__ = ["SessionController", "success_title"]
