from typing import Optional

from pulumi import Output
from pulumi_azure_native import managedidentity


def merge_tags(*tag_sets: Optional[dict[str, str]]) -> dict[str, str]:
    """
    Merges tag dictionaries left to right. Later sets win on key collisions
    and `None` entries are skipped.
    """

    merged: dict[str, str] = {}
    for tags in tag_sets:
        if tags:
            merged.update(tags)
    return merged


def user_assigned_identity_ids(
    *identities: managedidentity.UserAssignedIdentity,
) -> list[Output[str]]:
    """
    Returns the resource ids of the given identities in the shape expected by
    `VirtualMachineScaleSetIdentityArgs.user_assigned_identities`.
    """

    if not identities:
        raise ValueError("At least one user assigned identity is required.")
    return [identity.id for identity in identities]
