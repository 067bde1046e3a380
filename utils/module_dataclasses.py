from dataclasses import dataclass
from typing import Optional

from pulumi import Input, Output, export


@dataclass
class StackOutputs:
    """
    Dataclass to hold the values exported by the scale set stack.

    Args:
        resource_group_name (Output[str]): The name of the resource group.
        virtual_network_name (Output[str]): The name of the virtual network.
        subnet_id (Output[str]): The id of the scale set subnet.
        network_interface_id (Output[str]): The id of the standalone network
            interface.
        identity_id (Output[str]): The id of the user assigned identity.
        identity_principal_id (Output[str]): The principal id of the user
            assigned identity.
        identity_client_id (Output[str]): The client id of the user assigned
            identity.
        scale_set_name (Output[str]): The name of the virtual machine scale
            set.
        admin_username (str): The admin account of every instance.
        admin_password (Input[str]): The admin password. Always exported as a
            secret.
        prefix (str, optional): Prefix for every export key. Defaults to "".
    """

    resource_group_name: Output[str]
    virtual_network_name: Output[str]
    subnet_id: Output[str]
    network_interface_id: Output[str]
    identity_id: Output[str]
    identity_principal_id: Output[str]
    identity_client_id: Output[str]
    scale_set_name: Output[str]
    admin_username: str
    admin_password: Input[str]
    prefix: Optional[str] = ""

    def __post_init__(self):
        self.admin_password = Output.secret(self.admin_password)

    def values(self) -> dict[str, Input[str]]:
        return {
            f"{self.prefix}{key}": value
            for key, value in vars(self).items()
            if key != "prefix"
        }

    def export(self) -> None:
        for key, value in self.values().items():
            export(key, value)
