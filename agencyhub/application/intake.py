"""Client intake payload accepted by the provisioning workflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from agencyhub.domain.entities.membership import MemberRole
from agencyhub.domain.exceptions import ValidationError
from agencyhub.domain.value_objects import EmailAddress, slugify

INVITABLE_ROLES = (MemberRole.CLIENT, MemberRole.CLIENT_ADMIN, MemberRole.CLIENT_USER)


@dataclass
class InitialUser:
    email: str
    name: str
    role: str = MemberRole.CLIENT.value

    def resolved_role(self) -> MemberRole:
        role = MemberRole.from_external(self.role)
        if role not in INVITABLE_ROLES:
            raise ValidationError(f"Invalid role for {self.email}: {self.role}", field="initialUsers")
        return role


@dataclass
class ClientIntake:
    """Everything an agency owner supplies to create a sub-client."""

    business_name: str
    industry: str
    contact_email: str
    enabled_features: List[str]
    contact_phone: str = ""
    project_template: Optional[str] = None
    initial_users: List[InitialUser] = field(default_factory=list)
    logo: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    monthly_price: Optional[float] = None
    payment_method: Optional[str] = None

    def validate(self) -> str:
        """Check required fields and return the derived slug.

        Raises:
            ValidationError: A required field is missing or malformed
        """
        required = {
            "businessName": self.business_name,
            "industry": self.industry,
            "contactEmail": self.contact_email,
            "enabledFeatures": self.enabled_features,
        }
        missing = [name for name, value in required.items() if not value or (isinstance(value, str) and not value.strip())]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}", field=missing[0])

        try:
            EmailAddress(self.contact_email)
        except ValueError:
            raise ValidationError("Invalid contact email", field="contactEmail")

        for user in self.initial_users:
            try:
                EmailAddress(user.email)
            except ValueError:
                raise ValidationError(f"Invalid email for initial user: {user.email}", field="initialUsers")
            user.resolved_role()

        if self.monthly_price is not None and self.monthly_price < 0:
            raise ValidationError("monthlyPrice cannot be negative", field="monthlyPrice")

        slug = slugify(self.business_name)
        if not slug:
            raise ValidationError("Business name must contain letters or digits", field="businessName")
        return slug

    def wants_billing(self) -> bool:
        return bool(self.monthly_price) and bool(self.payment_method)


__all__ = ["ClientIntake", "InitialUser", "INVITABLE_ROLES"]
