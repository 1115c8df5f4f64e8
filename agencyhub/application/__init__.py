"""Application services orchestrating domain ports."""

from agencyhub.application.activity_recorder import ActivityRecorder
from agencyhub.application.billing_reconciler import BillingReconciler
from agencyhub.application.intake import ClientIntake, InitialUser
from agencyhub.application.provisioning_workflow import ProvisioningWorkflow

__all__ = [
    "ActivityRecorder",
    "BillingReconciler",
    "ClientIntake",
    "InitialUser",
    "ProvisioningWorkflow",
]
