from typing import TypedDict, Union


class RuleRegistryEntry(TypedDict, total=False):
    kind: str
    # dependency rules
    package: str
    dev: bool
    optional: bool
    # json-property rules
    document: str
    file: str
    path: Union[str, list[str]]
    title: str
    description: str
    severity: str
    resolution: str
