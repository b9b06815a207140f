import asyncio
import types

import pytest

from pagepath import LocatorInvocation, ScriptInvocation, UnknownStrategyError, to_locator
from pagepath.dsl import SELECTOR_TYPES, ElementDefinition


@pytest.mark.parametrize(
    "selector_type, using",
    [
        ("css", "css selector"),
        ("xpath", "xpath"),
        ("android", "-android uiautomator"),
        ("ios", "-ios uiautomation"),
        ("accessibilityId", "accessibility id"),
    ],
)
def test_strategy_table(selector_type, using):
    definition = ElementDefinition(alias="x", selector="value", selector_type=selector_type)
    assert to_locator(definition) == LocatorInvocation(using=using, value="value")
    assert to_locator(definition).as_dict() == {"using": using, "value": "value"}


def test_unknown_strategy():
    definition = ElementDefinition(alias="x", selector="value", selector_type="link text")
    with pytest.raises(UnknownStrategyError) as excinfo:
        to_locator(definition)
    assert str(excinfo.value) == "Selector type link text is not defined"


def test_string_script_goes_through_execute_script():
    calls = []

    async def execute_script(script):
        calls.append(script)
        return "result"

    driver = types.SimpleNamespace(execute_script=execute_script)
    invocation = to_locator(ElementDefinition(alias="x", selector="return 1", selector_type="js"))
    assert isinstance(invocation, ScriptInvocation)
    assert asyncio.run(invocation(driver)) == "result"
    assert calls == ["return 1"]


def test_callable_script_receives_unwrapped_driver():
    driver = object()
    page = types.SimpleNamespace(driver=driver)

    async def script(context):
        assert context is driver
        return "async result"

    invocation = to_locator(ElementDefinition(alias="x", selector=script, selector_type="js"))
    assert asyncio.run(invocation(page)) == "async result"

    sync_invocation = ScriptInvocation(lambda context: context)
    assert asyncio.run(sync_invocation(driver)) is driver


@pytest.mark.parametrize("selector_type", SELECTOR_TYPES)
def test_every_registered_strategy_maps(selector_type):
    definition = ElementDefinition(alias="x", selector="value", selector_type=selector_type)
    assert to_locator(definition) is not None
