"""Tests for hookorder.engine.classify: statement categories."""

from __future__ import annotations

import pytest

from hookorder.engine.categories import Category, HookNames
from hookorder.treesitter import is_available

pytestmark = pytest.mark.skipif(
    not is_available(), reason="tree-sitter-language-pack not installed"
)


def _categories(body: str, params: str = "{ title, user }", *, prefix: str = "",
                hook_names: HookNames | None = None) -> list[Category]:
    """Categories of the body statements of a component (last one is the return)."""
    from hookorder.engine.functions import find_functions, module_declared_names
    from hookorder.engine.rule import analyze_body, function_context
    from hookorder.treesitter import parse_source

    source = (
        f"{prefix}"
        f"function Widget({params}) {{\n"
        f"{body}\n"
        f"  return <div>{{title}}</div>;\n"
        f"}}\n"
    ).encode()
    tree = parse_source(source, "tsx")
    candidate = find_functions(tree.root_node, source)[0]
    kwargs = {"module_names": module_declared_names(tree.root_node, source)}
    if hook_names is not None:
        kwargs["hook_names"] = hook_names
    context = function_context(candidate, source, **kwargs)
    return [stmt.category for stmt in analyze_body(candidate.body, context, source)]


def _first(body: str, **kwargs) -> Category:
    return _categories(body, **kwargs)[0]


# ── Hook calls ───────────────────────────────────────────────


class TestHookDeclarations:
    @pytest.mark.parametrize("line,expected", [
        ("const inputRef = useRef(null);", Category.REF),
        ("const [open, setOpen] = useState(false);", Category.STATE),
        ("const [state, dispatch] = useReducer(reducer, initial);", Category.REDUCER),
        ("const items = useSelector(selectItems);", Category.EXTERNAL_STORE),
        ("const dispatch = useDispatch();", Category.EXTERNAL_STORE),
        ("const navigate = useNavigate();", Category.ROUTER),
        ("const { id } = useParams();", Category.ROUTER),
        ("const theme = useContext(ThemeContext);", Category.CONTEXT),
        ("const { t } = useTranslation();", Category.CONTEXT),
        ("const data = useFetch(url);", Category.CUSTOM_HOOK),
        ("const total = useMemo(() => 1, []);", Category.MEMO),
        ("const onSave = useCallback(() => {}, []);", Category.CALLBACK),
    ])
    def test_declaration_category(self, line, expected):
        assert _first(f"  {line}") is expected

    def test_namespaced_hook(self):
        assert _first("  const [v, setV] = React.useState(0);") is Category.STATE

    def test_typescript_generic_hook(self):
        assert _first("  const [v, setV] = useState<string>('');") is Category.STATE

    def test_configured_store_hook(self):
        names = HookNames.from_config({"store_hooks": ["useAppSelector"]})
        assert _first("  const user = useAppSelector(selectUser);", hook_names=names) \
            is Category.EXTERNAL_STORE

    def test_unconfigured_store_hook_is_custom(self):
        assert _first("  const user = useAppSelector(selectUser);") is Category.CUSTOM_HOOK


# ── Expression statements ────────────────────────────────────


class TestExpressionStatements:
    def test_use_effect(self):
        assert _first("  useEffect(() => {}, []);") is Category.EFFECT

    def test_use_layout_effect(self):
        assert _first("  useLayoutEffect(() => {});") is Category.EFFECT

    def test_configured_effect_hook(self):
        names = HookNames.from_config({"effect_hooks": ["useUpdateEffect"]})
        assert _first("  useUpdateEffect(() => {});", hook_names=names) is Category.EFFECT

    def test_bare_custom_hook(self):
        assert _first("  useTrackPage('home');") is Category.CUSTOM_HOOK

    def test_plain_call_is_unknown(self):
        assert _first("  console.log(title);") is Category.UNKNOWN

    def test_assignment_is_unknown(self):
        assert _first("  window.title = title;") is Category.UNKNOWN


# ── Functions ────────────────────────────────────────────────


class TestHandlers:
    def test_arrow_function(self):
        assert _first("  const onClick = () => setOpen(true);") is Category.HANDLER

    def test_function_expression(self):
        assert _first("  const onClick = function () {};") is Category.HANDLER

    def test_function_declaration(self):
        assert _first("  function onSubmit() {}") is Category.HANDLER

    def test_call_to_local_handler(self):
        body = "  const styles = getStyles();\n  const getStyles = () => ({});"
        assert _categories(body)[0] is Category.HANDLER

    def test_call_to_module_function(self):
        prefix = "function computeLayout() { return {}; }\n"
        assert _first("  const layout = computeLayout();", prefix=prefix) is Category.HANDLER

    def test_call_to_import_is_derived(self):
        prefix = "import { computeLayout } from './layout';\n"
        assert _first("  const layout = computeLayout();", prefix=prefix) is Category.DERIVED


# ── Props destructuring ──────────────────────────────────────


class TestProps:
    def test_destructure_prop(self):
        assert _first("  const { name, email } = user;") is Category.PROPS_DESTRUCTURE_BODY

    def test_destructure_nested_prop(self):
        assert _first("  const { city } = user.address;") is Category.PROPS_DESTRUCTURE_BODY

    def test_destructure_props_parameter(self):
        assert _first("  const { title } = props;", params="props") \
            is Category.PROPS_DESTRUCTURE_BODY

    def test_legacy_props_name(self):
        assert _first("  const { title } = props;", params="input") is Category.PROPS_DESTRUCTURE

    def test_destructure_non_prop_is_derived(self):
        assert _first("  const { a } = settings;") is Category.DERIVED


# ── Everything else ──────────────────────────────────────────


class TestOther:
    def test_derived_value(self):
        assert _first("  const label = title.toUpperCase();") is Category.DERIVED

    def test_uninitialized_let_is_derived(self):
        assert _first("  let pending;") is Category.DERIVED

    def test_if_statement_unknown(self):
        assert _first("  if (!user) {\n    return null;\n  }") is Category.UNKNOWN

    def test_return(self):
        assert _categories("  const x = 1;")[-1] is Category.RETURN
