from .smtp_notifier import SmtpRecipeNotifier

__all__ = ["SmtpRecipeNotifier"]
