import re
from typing import Optional

from attr import dataclass
from pulumi import ComponentResource, Output, ResourceOptions, log
from pulumi_azure_native import (
    managedidentity as az_managedidentity,
    resources as az_resources,
)


@dataclass
class IdentitySpecs:
    name: str = "test_identity"

    def __attrs_post_init__(self):
        if not re.match(r"^[A-Za-z0-9][A-Za-z0-9\-_]{2,127}$", self.name):
            raise ValueError(
                f"identity name '{self.name}' must be 3-128 characters of letters, numbers, hyphens and underscores, starting with a letter or number."  # noqa: E501
            )


class ManagedIdentity(ComponentResource):
    """
    Create a User Assigned Managed Identity.
    """

    def __init__(
        self,
        name: str,
        identity_spec: IdentitySpecs,
        resource_group: az_resources.ResourceGroup,
        opts: Optional[ResourceOptions] = None,
        tags: Optional[dict] = None,
    ):
        super().__init__("azvmss:identity:ManagedIdentity", name, None, opts)

        self.opts = ResourceOptions.merge(opts, ResourceOptions(parent=self))

        log.debug(f"Declaring user assigned identity {identity_spec.name}")

        self.identity = az_managedidentity.UserAssignedIdentity(
            identity_spec.name,
            resource_group_name=resource_group.name,
            resource_name_=identity_spec.name,
            location=resource_group.location,
            opts=self.opts,
            tags=tags,
        )

        self.identity_id: Output[str] = self.identity.id
        self.principal_id: Output[str] = self.identity.principal_id
        self.client_id: Output[str] = self.identity.client_id

        self.register_outputs(
            {
                "identity_id": self.identity_id,
                "principal_id": self.principal_id,
                "client_id": self.client_id,
            }
        )
