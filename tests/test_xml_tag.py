"""Tests for the tag matcher and serializer."""

from xmplite.xml_tag import XmlTag


def first(text, ns=None, name=None):
    tags = XmlTag.find_all(text, ns, name)
    assert tags
    return tags[0]


# ---------------------------------------------------------------------------
# matching
# ---------------------------------------------------------------------------

def test_self_closing_tag_is_absent():
    tag = first("<ns:tag/>")
    assert tag.value is None
    assert tag.serialize() is None

def test_paired_tag_captures_parts():
    tag = first('<dc:format xml:lang="en">image/jpeg</dc:format>')
    assert (tag.ns, tag.name) == ("dc", "format")
    assert tag.inner_xml == "image/jpeg"
    assert [attr.name for attr in tag.attrs] == ["lang"]

def test_top_level_tags_only():
    tags = XmlTag.find_all("<a:x><b:y>1</b:y></a:x><a:z>2</a:z>")
    assert [tag.name for tag in tags] == ["x", "z"]
    assert [child.name for child in tags[0].children] == ["y"]

def test_filter_by_namespace_and_name():
    text = "<dc:creator>Jane</dc:creator><rdf:Description><dc:title>T</dc:title></rdf:Description>"
    tags = XmlTag.find_all(text, "rdf", "Description")
    assert len(tags) == 1
    assert tags[0].children[0].name == "title"

def test_filter_by_name_only():
    tags = XmlTag.find_all("<dc:title>A</dc:title><xmp:title>B</xmp:title><dc:creator>C</dc:creator>",
                           name="title")
    assert [tag.ns for tag in tags] == ["dc", "xmp"]

def test_mismatched_close_tag_does_not_pair():
    assert XmlTag.find_all("<a:x>1</a:y>") == []

def test_nested_same_name_uses_shortest_span():
    tags = XmlTag.find_all("<a:x><a:x>1</a:x></a:x>")
    assert len(tags) == 1
    assert tags[0].children == []
    assert tags[0].value == "<a:x>1"

def test_empty_input():
    assert XmlTag.find_all("") == []
    assert XmlTag.find_all(None) == []


# ---------------------------------------------------------------------------
# classification
# ---------------------------------------------------------------------------

def test_classification():
    tag = first("<dc:subject><rdf:Bag><rdf:li>cat</rdf:li></rdf:Bag></dc:subject>")
    assert not tag.is_primitive
    assert not tag.is_list
    assert tag.is_list_container
    assert tag.children[0].is_list
    assert tag.children[0].children[0].is_primitive

def test_children_and_value_are_exclusive():
    tag = first("<a:x>text<b:y>1</b:y></a:x>")
    assert tag.children
    assert tag.value is None


# ---------------------------------------------------------------------------
# serialization
# ---------------------------------------------------------------------------

def test_primitive():
    assert first("<dc:creator>Jane</dc:creator>").serialize() == "Jane"

def test_single_item_bag_unwraps():
    tag = first("<dc:subject><rdf:Bag><rdf:li>cat</rdf:li></rdf:Bag></dc:subject>")
    assert tag.serialize() == "cat"

def test_seq_keeps_document_order():
    tag = first("""<dc:creator>
        <rdf:Seq>
            <rdf:li>Jane</rdf:li>
            <rdf:li>John</rdf:li>
        </rdf:Seq>
    </dc:creator>""")
    assert tag.serialize() == ["Jane", "John"]

def test_list_drops_absent_items():
    tag = first("<rdf:Seq><rdf:li>1</rdf:li><rdf:li/><rdf:li>2</rdf:li></rdf:Seq>")
    assert tag.serialize() == [1, 2]

def test_language_alternative():
    tag = first('<dc:title><rdf:Alt><rdf:li xml:lang="x-default">Hello</rdf:li></rdf:Alt></dc:title>')
    assert tag.serialize() == {"lang": "x-default", "value": "Hello"}

def test_attributes_then_children():
    tag = first('<rdf:Description dc:format="image/jpeg"><dc:creator>Jane</dc:creator></rdf:Description>')
    result = tag.serialize()
    assert result == {"format": "image/jpeg", "creator": "Jane"}
    assert list(result) == ["format", "creator"]

def test_attribute_only_element():
    tag = first('<rdf:Description xmp:Rating="5" tiff:Make="Canon"/>')
    assert tag.serialize() == {"Rating": 5, "Make": "Canon"}

def test_same_local_name_overwrites():
    tag = first('<rdf:Description a:name="1"><b:name>2</b:name></rdf:Description>')
    assert tag.serialize() == {"name": 2}

def test_struct_with_parse_type():
    tag = first('<xmpMM:DerivedFrom rdf:parseType="Resource">'
                '<stRef:documentID>abc</stRef:documentID></xmpMM:DerivedFrom>')
    assert tag.serialize() == {"parseType": "Resource", "documentID": "abc"}

def test_seq_of_structs():
    tag = first('<xmpMM:History><rdf:Seq>'
                '<rdf:li stEvt:action="created" stEvt:when="2020"/>'
                '<rdf:li stEvt:action="saved"/>'
                '</rdf:Seq></xmpMM:History>')
    assert tag.serialize() == [{"action": "created", "when": 2020}, {"action": "saved"}]

def test_whitespace_only_element_is_absent():
    assert first("<dc:x>   </dc:x>").serialize() is None

def test_serialize_is_idempotent():
    tag = first('<rdf:Description xmp:Rating="5"><dc:subject><rdf:Bag>'
                '<rdf:li>a</rdf:li><rdf:li>b</rdf:li></rdf:Bag></dc:subject></rdf:Description>')
    assert tag.serialize() == tag.serialize() == {"Rating": 5, "subject": ["a", "b"]}

def test_full_width_digits_keep_their_text():
    assert first("<dc:title>２０２０</dc:title>").serialize() == "２０２０"
