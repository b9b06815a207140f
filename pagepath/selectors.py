"""Map definition locator strategies to driver invocations."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Dict, Union

from .dsl.models import Definition
from .errors import UnknownStrategyError

# WebDriver / Appium "using" values for every non-script strategy.
STRATEGY_USING: Dict[str, str] = {
    "css": "css selector",
    "xpath": "xpath",
    "android": "-android uiautomator",
    "ios": "-ios uiautomation",
    "accessibilityId": "accessibility id",
}
SCRIPT_STRATEGY = "js"


@dataclass(frozen=True, slots=True)
class LocatorInvocation:
    using: str
    value: str

    def as_dict(self) -> Dict[str, str]:
        return {"using": self.using, "value": self.value}


@dataclass(frozen=True, slots=True)
class ScriptInvocation:
    """Runs a stored script in driver context.

    String scripts go through ``execute_script``; Python callables receive the
    driver and may return an awaitable. Parameters cannot be passed through.
    """

    script: Any

    async def __call__(self, context: Any) -> Any:
        driver = getattr(context, "driver", None) or context
        if callable(self.script):
            result = self.script(driver)
            if inspect.isawaitable(result):
                result = await result
            return result
        return await driver.execute_script(self.script)


Invocation = Union[LocatorInvocation, ScriptInvocation]


def to_locator(definition: Definition) -> Invocation:
    selector_type = definition.selector_type
    if selector_type == SCRIPT_STRATEGY:
        return ScriptInvocation(definition.selector)
    using = STRATEGY_USING.get(selector_type)
    if using is None:
        raise UnknownStrategyError(selector_type, alias=definition.alias)
    return LocatorInvocation(using=using, value=str(definition.selector))
