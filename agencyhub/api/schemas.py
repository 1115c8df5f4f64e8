"""Request models for the HTTP surface.

Fields are lenient on purpose: required-field checks live in the
application layer so every entry point reports them the same way.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.application.intake import ClientIntake, InitialUser


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InitialUserRequest(CamelModel):
    email: str = ""
    name: str = ""
    role: str = "client"


class ClientIntakeRequest(CamelModel):
    """Request model for provisioning a sub-client"""

    business_name: str = Field("", alias="businessName")
    industry: str = ""
    contact_email: str = Field("", alias="contactEmail")
    contact_phone: str = Field("", alias="contactPhone")
    project_template: Optional[str] = Field(None, alias="projectTemplate")
    enabled_features: List[str] = Field(default_factory=list, alias="enabledFeatures")
    initial_users: List[InitialUserRequest] = Field(default_factory=list, alias="initialUsers")
    logo: Optional[str] = None
    primary_color: Optional[str] = Field(None, alias="primaryColor")
    secondary_color: Optional[str] = Field(None, alias="secondaryColor")
    monthly_price: Optional[float] = Field(None, alias="monthlyPrice")
    payment_method: Optional[str] = Field(None, alias="paymentMethod")

    def to_intake(self) -> ClientIntake:
        return ClientIntake(
            business_name=self.business_name,
            industry=self.industry,
            contact_email=self.contact_email,
            contact_phone=self.contact_phone,
            project_template=self.project_template,
            enabled_features=list(self.enabled_features),
            initial_users=[InitialUser(email=u.email, name=u.name, role=u.role) for u in self.initial_users],
            logo=self.logo,
            primary_color=self.primary_color,
            secondary_color=self.secondary_color,
            monthly_price=self.monthly_price,
            payment_method=self.payment_method,
        )


class AddonSelectionRequest(CamelModel):
    """Add-on key to quantity, counted in sale units."""

    addons: Dict[str, Any] = Field(default_factory=dict)


__all__ = [
    "AddonSelectionRequest",
    "ClientIntakeRequest",
    "InitialUserRequest",
]
