from typing import Iterable, List, NamedTuple

LIST_ITEM = "list-item"


class BodyElement(NamedTuple):
    tag: str
    text: str


def body_elements(body: Iterable) -> List[BodyElement]:
    """
    Map rich-text blocks to HTML wrappers. Each list item becomes its own
    single-item ``ul``; adjacent items are not merged into one list.
    """
    return [
        BodyElement("ul" if block.type == LIST_ITEM else "p", block.text)
        for block in body
    ]
