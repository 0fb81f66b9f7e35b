"""Registration decisions: sent to vendors after an admin review."""


class RegistrationApprovedTemplate:
    name = "registration_approved"

    @staticmethod
    def render(context: dict) -> dict:
        business = context.get("business_name", "your cafeteria")
        return {
            "subject": "Your cafeteria registration was approved",
            "body": (
                f"Good news: {business} has been approved.\n\n"
                "Your cafeteria has been created and is open for pre-orders. "
                "Sign in to add your menu."
            ),
        }


class RegistrationRejectedTemplate:
    name = "registration_rejected"

    @staticmethod
    def render(context: dict) -> dict:
        business = context.get("business_name", "your cafeteria")
        reason = context.get("reason") or "No reason was given."
        return {
            "subject": "Your cafeteria registration was not approved",
            "body": (
                f"Unfortunately {business} was not approved.\n\n"
                f"Reason: {reason}\n\n"
                "You can correct your details and submit a new application."
            ),
        }
