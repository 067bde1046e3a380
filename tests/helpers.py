"""Pulumi runtime mocks shared by the component tests."""

from typing import Any

import pulumi

# Marker key Pulumi puts on wire values wrapped as secrets; the plain value
# sits under "value".
SECRET_SIG_KEY = "4dabf18193072939515e22adb298388d"


def is_secret(value: Any) -> bool:
    return isinstance(value, dict) and SECRET_SIG_KEY in value


def unwrap_secret(value: Any) -> Any:
    return value["value"] if is_secret(value) else value


class AzureMocks(pulumi.runtime.Mocks):
    """
    Echoes resource inputs back as outputs and records them by resource name
    so tests can inspect exactly what a component sent to the engine.
    """

    def __init__(self) -> None:
        self.resources: dict[str, pulumi.runtime.MockResourceArgs] = {}

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        self.resources[args.name] = args
        outputs = {"name": args.name, "location": "eastus", **args.inputs}
        if args.typ == "azure-native:managedidentity:UserAssignedIdentity":
            outputs["principalId"] = f"{args.name}-principal"
            outputs["clientId"] = f"{args.name}-client"
        if args.typ == "azure-native:compute:VirtualMachineScaleSet":
            # Identity ids go in as a list but come back keyed by id.
            identity = dict(outputs.get("identity") or {})
            identity["userAssignedIdentities"] = {
                identity_id: {}
                for identity_id in identity.get("userAssignedIdentities") or []
            }
            outputs["identity"] = identity
        if args.typ == "random:index/randomPassword:RandomPassword":
            outputs["result"] = MOCK_PASSWORD
        return [f"{args.name}-id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        return {}

    def inputs(self, name: str) -> dict[str, Any]:
        return dict(self.resources[name].inputs)


MOCK_PASSWORD = "Mock-Passw0rd!"
MOCKS = AzureMocks()
