"""
Package identifiers and export tables for the split @remix-run/* packages.

The monolithic ``remix`` package re-exported everything from the runtime,
adapter and client packages. This module records which names each of those
packages provides so imports can be routed to their new home.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple

REMIX_NAMESPACE = "@remix-run/"
LEGACY_PACKAGE = "remix"
LEGACY_BUCKET = "legacy"


class Runtime(str, Enum):
    """
    Server runtimes. Declaration order is the order offered to the user.

    Examples:
        >>> Runtime("node") is Runtime.NODE
        True
    """

    CLOUDFLARE = "cloudflare"
    DENO = "deno"
    NODE = "node"

    def __str__(self) -> str:
        return self.value


class Adapter(str, Enum):
    """Deployment-target server adapters."""

    ARCHITECT = "architect"
    CLOUDFLARE_PAGES = "cloudflare-pages"
    CLOUDFLARE_WORKERS = "cloudflare-workers"
    EXPRESS = "express"
    NETLIFY = "netlify"
    VERCEL = "vercel"

    def __str__(self) -> str:
        return self.value


class Client(str, Enum):
    """Browser-side integration packages."""

    REACT = "react"

    def __str__(self) -> str:
        return self.value


PackageIdentifier = Runtime | Adapter | Client

BASELINE_RUNTIME = Runtime.NODE


def adapter_runtime(adapter: Adapter) -> Runtime:
    """Return the runtime an adapter runs on."""
    match adapter:
        case Adapter.ARCHITECT | Adapter.EXPRESS | Adapter.NETLIFY | Adapter.VERCEL:
            return Runtime.NODE
        case Adapter.CLOUDFLARE_PAGES | Adapter.CLOUDFLARE_WORKERS:
            return Runtime.CLOUDFLARE
    raise ValueError(f"Unknown adapter: {adapter!r}")


def is_runtime(value: str) -> bool:
    return value in {r.value for r in Runtime}


def is_adapter(value: str) -> bool:
    return value in {a.value for a in Adapter}


def is_client(value: str) -> bool:
    return value in {c.value for c in Client}


def package_specifier(bucket: str) -> str:
    """
    Map a bucket key to the module specifier imports should be rewritten to.

    Examples:
        >>> package_specifier("node")
        '@remix-run/node'
        >>> package_specifier("legacy")
        'remix'
    """
    if bucket == LEGACY_BUCKET:
        return LEGACY_PACKAGE
    return f"{REMIX_NAMESPACE}{bucket}"


class ExportNames(NamedTuple):
    """Type-level and value-level names exported by one package."""

    type_exports: frozenset[str]
    value_exports: frozenset[str]

    @property
    def names(self) -> frozenset[str]:
        return self.type_exports | self.value_exports

    def provides(self, name: str) -> bool:
        return name in self.type_exports or name in self.value_exports


def _exports(types: list[str], values: list[str]) -> ExportNames:
    return ExportNames(frozenset(types), frozenset(values))


# Shared by every runtime package
_RUNTIME_TYPES = [
    "ActionFunction",
    "AppData",
    "AppLoadContext",
    "Cookie",
    "CookieOptions",
    "CookieParseOptions",
    "CookieSerializeOptions",
    "CookieSignatureOptions",
    "CreateRequestHandlerFunction",
    "DataFunctionArgs",
    "EntryContext",
    "ErrorBoundaryComponent",
    "HandleDataRequestFunction",
    "HandleDocumentRequestFunction",
    "HeadersFunction",
    "HtmlLinkDescriptor",
    "HtmlMetaDescriptor",
    "LinkDescriptor",
    "LinksFunction",
    "LoaderFunction",
    "MetaDescriptor",
    "MetaFunction",
    "PageLinkDescriptor",
    "RequestHandler",
    "RouteComponent",
    "RouteHandle",
    "ServerBuild",
    "ServerEntryModule",
    "Session",
    "SessionData",
    "SessionIdStorageStrategy",
    "SessionStorage",
]

_RUNTIME_VALUES = [
    "createCookie",
    "createCookieSessionStorage",
    "createMemorySessionStorage",
    "createSession",
    "createSessionStorage",
    "isCookie",
    "isSession",
    "json",
    "redirect",
]

_ADAPTER_TYPES = ["GetLoadContextFunction", "RequestHandler"]


PACKAGE_EXPORTS: Mapping[PackageIdentifier, ExportNames] = MappingProxyType(
    {
        Adapter.ARCHITECT: _exports(
            _ADAPTER_TYPES, ["createArcTableSessionStorage", "createRequestHandler"]
        ),
        Adapter.CLOUDFLARE_PAGES: _exports(
            ["createPagesFunctionHandlerParams"], ["createPagesFunctionHandler"]
        ),
        Adapter.CLOUDFLARE_WORKERS: _exports(
            _ADAPTER_TYPES, ["createEventHandler", "handleAsset"]
        ),
        Adapter.EXPRESS: _exports(_ADAPTER_TYPES, ["createRequestHandler"]),
        Adapter.NETLIFY: _exports(_ADAPTER_TYPES, ["createRequestHandler"]),
        Adapter.VERCEL: _exports(_ADAPTER_TYPES, ["createRequestHandler"]),
        Client.REACT: _exports(
            [
                "FormEncType",
                "FormMethod",
                "FormProps",
                "Fetcher",
                "HtmlLinkDescriptor",
                "LinkProps",
                "NavLinkProps",
                "RemixBrowserProps",
                "RemixServerProps",
                "ShouldReloadFunction",
                "SubmitFunction",
                "SubmitOptions",
                "ThrownResponse",
            ],
            [
                "Form",
                "Link",
                "Links",
                "LiveReload",
                "Meta",
                "NavLink",
                "PrefetchPageLinks",
                "RemixBrowser",
                "RemixServer",
                "Scripts",
                "ScrollRestoration",
                "useActionData",
                "useBeforeUnload",
                "useCatch",
                "useFetcher",
                "useFetchers",
                "useFormAction",
                "useHref",
                "useLoaderData",
                "useLocation",
                "useMatches",
                "useNavigate",
                "useNavigationType",
                "useOutlet",
                "useOutletContext",
                "useParams",
                "useResolvedPath",
                "useSearchParams",
                "useSubmit",
                "useTransition",
            ],
        ),
        Runtime.CLOUDFLARE: _exports(
            _RUNTIME_TYPES,
            _RUNTIME_VALUES + ["createCloudflareKVSessionStorage"],
        ),
        Runtime.DENO: _exports(
            _RUNTIME_TYPES,
            _RUNTIME_VALUES + ["createFileSessionStorage"],
        ),
        Runtime.NODE: _exports(
            _RUNTIME_TYPES
            + [
                "HeadersInit",
                "RequestInfo",
                "RequestInit",
                "ResponseInit",
                "UploadHandler",
                "UploadHandlerArgs",
            ],
            _RUNTIME_VALUES
            + [
                "AbortController",
                "createFileSessionStorage",
                "fetch",
                "FormData",
                "Headers",
                "NodeOnDiskFile",
                "Request",
                "Response",
                "unstable_createFileUploadHandler",
                "unstable_createMemoryUploadHandler",
                "unstable_parseMultipartFormData",
            ],
        ),
    }
)

# Every adapter must map to a runtime and every identifier needs an export entry
for _adapter in Adapter:
    adapter_runtime(_adapter)
_missing = [str(p) for p in (*Runtime, *Adapter, *Client) if p not in PACKAGE_EXPORTS]
if _missing:
    raise RuntimeError(f"Missing export tables for: {', '.join(_missing)}")
del _adapter, _missing
