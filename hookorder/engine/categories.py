"""Taxonomy categories for statements in components and custom hooks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum


class Category(IntEnum):
    """Ordered buckets; lower values must appear first in a function body."""

    PROPS_DESTRUCTURE = 1
    PROPS_DESTRUCTURE_BODY = 2
    REF = 3
    STATE = 4
    REDUCER = 5
    EXTERNAL_STORE = 6
    ROUTER = 7
    CONTEXT = 8
    CUSTOM_HOOK = 9
    DERIVED = 10
    MEMO = 11
    CALLBACK = 12
    HANDLER = 13
    EFFECT = 14
    RETURN = 15
    UNKNOWN = 99

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: dict[Category, str] = {
    Category.PROPS_DESTRUCTURE: "props destructure",
    Category.PROPS_DESTRUCTURE_BODY: "destructured variables from props",
    Category.REF: "useRef",
    Category.STATE: "useState",
    Category.REDUCER: "useReducer",
    Category.EXTERNAL_STORE: "useSelector/useDispatch",
    Category.ROUTER: "router hooks",
    Category.CONTEXT: "context hooks",
    Category.CUSTOM_HOOK: "custom hooks",
    Category.DERIVED: "derived state/computed variables",
    Category.MEMO: "useMemo",
    Category.CALLBACK: "useCallback",
    Category.HANDLER: "handler functions",
    Category.EFFECT: "useEffect/useLayoutEffect",
    Category.RETURN: "return statement",
    Category.UNKNOWN: "unknown",
}

ORDER_SUMMARY = (
    "refs → state → redux → router → context → custom hooks → derived"
    " → useMemo → useCallback → handlers → useEffect → return"
)

HOOK_NAME_RE = re.compile(r"^use[A-Z]")
CONSTANT_NAME_RE = re.compile(r"^[A-Z][A-Z0-9_]*$")
COMPONENT_NAME_RE = re.compile(r"^[A-Z]")

# Legacy single props parameter name.
LEGACY_PROPS_NAME = "props"

REF_HOOKS = frozenset({"useRef"})
STATE_HOOKS = frozenset({"useState"})
REDUCER_HOOKS = frozenset({"useReducer"})
MEMO_HOOKS = frozenset({"useMemo"})
CALLBACK_HOOKS = frozenset({"useCallback"})
EFFECT_HOOKS = frozenset({"useEffect", "useLayoutEffect"})

# Redux
STORE_HOOKS = frozenset({"useSelector", "useDispatch", "useStore"})

# react-router, next/navigation
ROUTER_HOOKS = frozenset({
    "useNavigate",
    "useLocation",
    "useParams",
    "useSearchParams",
    "useRouter",
    "usePathname",
    "useMatch",
    "useMatches",
    "useRouteLoaderData",
    "useNavigation",
    "useResolvedPath",
    "useHref",
    "useInRouterContext",
    "useNavigationType",
    "useOutlet",
    "useOutletContext",
    "useRouteError",
    "useRoutes",
    "useBlocker",
})

CONTEXT_HOOKS = frozenset({
    "useContext",
    "useToast",
    "useTheme",
    "useAuth",
    "useModal",
    "useDialog",
    "useNotification",
    "useI18n",
    "useTranslation",
    "useIntl",
    "useForm",
    "useFormContext",
})


def is_hook_name(name: str | None) -> bool:
    """True for names following the ``use`` + capital letter convention."""
    return bool(name) and HOOK_NAME_RE.match(name) is not None


@dataclass(frozen=True)
class HookNames:
    """Hook-name sets used by the classifier, in lookup priority order."""

    state: frozenset[str] = STATE_HOOKS
    ref: frozenset[str] = REF_HOOKS
    reducer: frozenset[str] = REDUCER_HOOKS
    store: frozenset[str] = STORE_HOOKS
    router: frozenset[str] = ROUTER_HOOKS
    context: frozenset[str] = CONTEXT_HOOKS
    memo: frozenset[str] = MEMO_HOOKS
    callback: frozenset[str] = CALLBACK_HOOKS
    effect: frozenset[str] = EFFECT_HOOKS

    @classmethod
    def from_config(cls, config: dict) -> HookNames:
        """Extend the built-in sets with names from the project config."""
        return cls(
            store=STORE_HOOKS | frozenset(config.get("store_hooks") or ()),
            router=ROUTER_HOOKS | frozenset(config.get("router_hooks") or ()),
            context=CONTEXT_HOOKS | frozenset(config.get("context_hooks") or ()),
            effect=EFFECT_HOOKS | frozenset(config.get("effect_hooks") or ()),
        )

    def declaration_category(self, hook_name: str) -> Category | None:
        """Category of ``const x = <hook_name>(...)``, or None for non-hooks."""
        for names, category in (
            (self.state, Category.STATE),
            (self.ref, Category.REF),
            (self.reducer, Category.REDUCER),
            (self.store, Category.EXTERNAL_STORE),
            (self.router, Category.ROUTER),
            (self.context, Category.CONTEXT),
            (self.memo, Category.MEMO),
            (self.callback, Category.CALLBACK),
        ):
            if hook_name in names:
                return category
        if is_hook_name(hook_name):
            return Category.CUSTOM_HOOK
        return None


DEFAULT_HOOK_NAMES = HookNames()

__all__ = [
    "CATEGORY_LABELS",
    "COMPONENT_NAME_RE",
    "CONSTANT_NAME_RE",
    "Category",
    "DEFAULT_HOOK_NAMES",
    "HookNames",
    "LEGACY_PROPS_NAME",
    "ORDER_SUMMARY",
    "is_hook_name",
]
