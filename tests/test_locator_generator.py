import pytest

from locatortool.errors import DetachedElementError, ResolutionError
from locatortool.html_snapshot import parse_html, select_nodes
from locatortool.locator_generator import describe_locators, resolve_all, resolve_primary
from locatortool.models import DomDocument, DomNode, LocatorStrategy


def _pick(html: str, css: str) -> tuple[DomDocument, DomNode]:
    document = parse_html(html)
    return document, select_nodes(document, css)[0]


def test_data_automation_scenario() -> None:
    document, node = _pick('<button data-automation="submit-btn">Submit</button>', "button")
    info = resolve_primary(document, node)
    assert info.strategy is LocatorStrategy.DATA_AUTOMATION
    assert info.locator_value == "[data-automation='submit-btn']"
    assert info.name == "btnSubmitBtn"
    assert info.tag_name == "button"
    assert info.xpath == "//button[1]"


def test_class_name_scenario() -> None:
    document, node = _pick('<div class="primary-btn">Go</div>', "div")
    info = resolve_primary(document, node)
    assert info.strategy is LocatorStrategy.CLASS_NAME
    assert info.locator_value == "div.primary-btn"
    assert info.name == "primaryBtn"


def test_id_scenario() -> None:
    document, node = _pick('<input id="loginEmail">', "input")
    info = resolve_primary(document, node)
    assert info.strategy is LocatorStrategy.ID
    assert info.locator_value == "loginEmail"
    assert info.xpath == ".//*[@id='loginEmail']"
    assert resolve_all(document, node).relative_xpath == ".//*[@id='loginEmail']"


def test_priority_order_is_strict() -> None:
    html = (
        '<button data-automation="auto" data-testid="tid" data-test="t" data-qa="qa" '
        'id="the-id" name="the-name" class="a b">x</button>'
    )
    document, node = _pick(html, "button")
    expected = [
        ("data-automation", LocatorStrategy.DATA_AUTOMATION, "[data-automation='auto']"),
        ("data-testid", LocatorStrategy.DATA_TESTID, "[data-testid='tid']"),
        ("data-test", LocatorStrategy.DATA_TESTID, "[data-test='t']"),
        ("data-qa", LocatorStrategy.DATA_TESTID, "[data-qa='qa']"),
        ("id", LocatorStrategy.ID, "the-id"),
        ("name", LocatorStrategy.NAME, "the-name"),
        ("class", LocatorStrategy.CLASS_NAME, "button.a.b"),
    ]
    for attr, strategy, value in expected:
        info = resolve_primary(document, node)
        assert (info.strategy, info.locator_value) == (strategy, value)
        del node.attributes[attr]

    info = resolve_primary(document, node)
    assert info.strategy is LocatorStrategy.CSS
    assert info.locator_value == "button:nth-of-type(1)"
    assert info.name == "btnButton_element"


def test_blank_attribute_values_are_unavailable() -> None:
    document, node = _pick('<span data-automation="" id="   " name="" class="chip">x</span>', "span")
    info = resolve_primary(document, node)
    assert info.strategy is LocatorStrategy.CLASS_NAME
    assert info.locator_value == "span.chip"


def test_quotes_in_attribute_values_are_escaped() -> None:
    document, node = _pick("""<a href="#" data-testid="it's">x</a>""", "a")
    info = resolve_primary(document, node)
    assert info.locator_value == "[data-testid='it\\'s']"
    assert info.name == "lnkItS"


def test_locator_values_keep_surrounding_whitespace() -> None:
    document, node = _pick('<button id=" save ">Save</button>', "button")
    info = resolve_primary(document, node)
    assert info.strategy is LocatorStrategy.ID
    assert info.locator_value == " save "
    assert info.xpath == ".//*[@id=' save ']"
    assert resolve_all(document, node).id == " save "

    document, node = _pick('<button data-automation=" go">Go</button>', "button")
    assert resolve_primary(document, node).locator_value == "[data-automation=' go']"


def test_resolve_all_keeps_long_visible_text() -> None:
    words = " ".join(["word"] * 80)
    document, node = _pick(f"<button>{words}</button>", "button")
    bundle = resolve_all(document, node)
    assert bundle.text == words
    assert bundle.text_xpath is None


def test_class_name_base_joins_classes() -> None:
    document, node = _pick('<a href="/" class="nav  link">Home</a>', "a")
    info = resolve_primary(document, node)
    assert info.locator_value == "a.nav.link"
    assert info.name == "lnkNav_link"


def test_structural_fallback_uses_tag_name_base() -> None:
    document, node = _pick('<div id="box"><p>one</p><p>two</p></div>', "p:nth-of-type(2)")
    info = resolve_primary(document, node)
    assert info.strategy is LocatorStrategy.CSS
    assert info.locator_value == "#box > p:nth-of-type(2)"
    assert info.name == "p_element"
    assert info.xpath == ".//*[@id='box']//p[2]"


def test_resolution_is_idempotent() -> None:
    document, node = _pick('<form id="f"><input class="field wide"></form>', "input")
    assert resolve_primary(document, node) == resolve_primary(document, node)
    assert resolve_all(document, node) == resolve_all(document, node)


def test_detached_and_non_element_nodes_raise() -> None:
    document = parse_html("<p>x</p>")
    with pytest.raises(DetachedElementError):
        resolve_primary(document, DomNode(tag="button", attributes={"id": "gone"}))
    with pytest.raises(ResolutionError):
        resolve_primary(document, DomNode(tag="#text", node_type=3))


def test_resolve_all_collects_every_candidate() -> None:
    html = (
        '<div id="panel"><button data-automation="save" data-qa="save-qa" name="saveBtn" '
        'class="btn primary">Save changes</button></div>'
    )
    document, node = _pick(html, "button")
    bundle = resolve_all(document, node)
    assert bundle.data_automation == "save"
    assert bundle.data_testid == "save-qa"
    assert bundle.id is None
    assert bundle.name_attr == "saveBtn"
    assert bundle.class_attr == "btn primary"
    assert bundle.css_data_automation == '[data-automation="save"]'
    assert bundle.css_data_testid == '[data-qa="save-qa"]'
    assert bundle.css_by_class == "button.btn.primary"
    assert bundle.css_generic == "#panel > button:nth-of-type(1)"
    assert bundle.text == "Save changes"
    assert bundle.text_xpath == ".//button[normalize-space()='Save changes']"
    assert bundle.relative_xpath == ".//*[@id='panel']//button[1]"


def test_resolve_all_omits_long_text_xpath_and_tolerates_detached_nodes() -> None:
    document = parse_html("<p>x</p>")
    bundle = resolve_all(document, DomNode(tag="span", text="a" * 41))
    assert bundle.text_xpath is None
    assert bundle.relative_xpath == "//span[1]"
    assert bundle.css_generic == "span"


def test_describe_locators_sections() -> None:
    document, node = _pick('<button id="save" name="s">Save</button>', "button")
    sections = describe_locators(document, node)
    assert [title for title, _ in sections] == [
        "By.id (Java/Selenium)",
        "By.name (Java/Selenium)",
        "CSS (generic)",
        "Relative XPath (primary)",
        "Text-based XPath",
        "Groovy (Selenide)",
        "Playwright (TS/JS)",
    ]
    as_dict = dict(sections)
    assert as_dict["By.id (Java/Selenium)"] == 'By.id("save")'
    assert as_dict["Groovy (Selenide)"] == '$(By.id("save"))'
    assert as_dict["Playwright (TS/JS)"] == 'page.locator("#save");'
