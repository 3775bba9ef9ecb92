from bp_tracker.client.controller import FormController, SubmitOutcome, SubmitState

__all__ = ["FormController", "SubmitOutcome", "SubmitState"]
