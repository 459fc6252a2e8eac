"""Tests for JSON serialization of document trees."""

import json

import pytest

from jianwen import parse_document
from jianwen.location import SourceLocation
from jianwen.nodes import ColorAttribute, Document, Text
from jianwen.serialization import from_dict, from_json, to_dict, to_json

RICH_SOURCE = """______
[title]=Sample [tag(s)]=a, b
______
#+ Heading *bold*
[c,->]
Say [red,!yellow]=hi= and [link]go(https://example.com) [fn:1]

[sheet]
|:-|-:|
| x | y |

[footnotes]
[fn=1]
Note.
"""


class TestToDict:
    """Dict shape."""

    def test_type_discriminator(self) -> None:
        data = to_dict(Text(content="hi", location=SourceLocation(lineno=2, col_offset=3)))
        assert data == {
            "_type": "Text",
            "content": "hi",
            "location": {
                "_type": "SourceLocation",
                "lineno": 2,
                "col_offset": 3,
                "source_file": None,
            },
            "origin": None,
        }

    def test_tuples_become_lists(self) -> None:
        data = to_dict(parse_document("a *b*"))
        paragraph = data["children"][0]
        assert isinstance(paragraph["children"], list)
        assert paragraph["children"][1]["_type"] == "Strong"


class TestRoundTrip:
    """to_json / from_json."""

    def test_rich_document(self) -> None:
        doc = parse_document(RICH_SOURCE)
        restored = from_json(to_json(doc))
        assert restored == doc

    def test_deterministic(self) -> None:
        doc = parse_document(RICH_SOURCE)
        assert to_json(doc) == to_json(parse_document(RICH_SOURCE))

    def test_indent(self) -> None:
        output = to_json(parse_document("x"), indent=2)
        assert "\n" in output
        assert json.loads(output)["_type"] == "Document"

    def test_non_ascii_kept(self) -> None:
        output = to_json(parse_document("简文"))
        assert "简文" in output

    def test_color_attribute_restored(self) -> None:
        doc = parse_document("---\n[#FF0000]---")
        restored = from_json(to_json(doc))
        assert restored.children[1].color == ColorAttribute(kind="hex", value="#FF0000")


class TestErrors:
    """Invalid input."""

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="_type"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "Bogus"})

    def test_value_type_is_not_a_node(self) -> None:
        with pytest.raises(ValueError, match="Expected a node"):
            from_dict({"_type": "ColorAttribute", "kind": "preset", "value": "red"})

    def test_from_json_requires_document(self) -> None:
        with pytest.raises(ValueError, match="Expected Document"):
            from_json(json.dumps(to_dict(Text(content="x"))))

    def test_document_type(self) -> None:
        assert isinstance(from_json(to_json(parse_document(""))), Document)
