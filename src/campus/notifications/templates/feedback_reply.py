"""Feedback reply: sent to a student when the cafeteria answers their feedback."""


class FeedbackReplyTemplate:
    name = "feedback_reply"

    @staticmethod
    def render(context: dict) -> dict:
        cafeteria = context.get("cafeteria_name") or "The cafeteria"
        verb = "updated its reply to" if context.get("edited") else "replied to"
        return {
            "subject": f"{cafeteria} {verb} your feedback",
            "body": f"{cafeteria} {verb} your feedback:\n\n{context.get('reply_text', '')}",
        }
