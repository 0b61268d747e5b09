from enum import StrEnum


class MemberKind(StrEnum):
    METHOD = "method"
    FIELD = "field"
    PROPERTY = "property"


class CompletionItemKind(StrEnum):
    BEAN = "bean"
    VARIABLE = "variable"
    METHOD = "method"
    FIELD = "field"
    PROPERTY = "property"


class CompletionContextKind(StrEnum):
    ROOT = "root"
    PATH = "path"


class Color(StrEnum):
    GREEN = "green"
    YELLOW = "yellow"
    CYAN = "cyan"
    RED = "red"
    MAGENTA = "magenta"


class EventType(StrEnum):
    MODIFIED = "modified"
    CREATED = "created"
    DELETED = "deleted"
    MOVED = "moved"


WATCHED_EVENT_TYPES = frozenset(EventType)


# (H) Source layout
JAVA_EXT = ".java"
DEFAULT_SOURCE_ROOT_RELATIVE = "src/main/java"
DEFAULT_INDEX_CACHE_TTL_MS = 10000
DEFAULT_DEBOUNCE_SECONDS = 0.5
DEFAULT_MAX_WAIT_SECONDS = 5.0
MS_PER_SECOND = 1000

ENCODING_UTF8 = "utf-8"
ENCODING_FALLBACK = "latin-1"

SEPARATOR_DOT = "."
SEPARATOR_COMMA = ","
CHAR_ANGLE_OPEN = "<"
CHAR_ANGLE_CLOSE = ">"
CHAR_BRACE_CLOSE = "}"
CHAR_QUESTION = "?"
ARRAY_SUFFIX = "[]"
CALL_SUFFIX = "()"
EL_OPEN = "#{"
JAVA_STDLIB_PREFIX = "java."
JAVA_TYPE_OBJECT = "Object"

GETTER_PREFIX = "get"
BOOLEAN_GETTER_PREFIX = "is"
SETTER_PREFIX = "set"

# (H) Markup documents handled by the assistant
TARGET_LANGUAGE_IDS = frozenset({"html", "xml"})
TARGET_DOCUMENT_SUFFIX = ".xhtml"
LANGUAGE_ID_BY_SUFFIX = {
    ".xhtml": "html",
    ".html": "html",
    ".htm": "html",
    ".xml": "xml",
    ".jsf": "html",
}
LANGUAGE_ID_PLAINTEXT = "plaintext"

# (H) Tag attributes that introduce a loop/local variable
BINDING_VAR_ATTRIBUTE = "var"
BINDING_VALUE_ATTRIBUTES = ("value", "items")
TAG_OPEN = "<"
TAG_CLOSE = ">"
TAG_NON_ELEMENT_MARKERS = frozenset({"/", "!", "?"})
QUOTE_CHARS = frozenset({'"', "'"})
MAX_BINDING_DEPTH = 8

# (H) Bean annotations
ANNOTATION_NAMED = "Named"
ANNOTATION_MANAGED_BEAN = "ManagedBean"

# (H) Members never offered: java.lang.Object noise
SKIPPED_METHOD_NAMES = frozenset({"equals", "hashCode", "toString"})

METHOD_MODIFIERS = (
    "public",
    "protected",
    "private",
    "static",
    "final",
    "abstract",
    "synchronized",
    "native",
    "default",
    "strictfp",
)
TYPE_MODIFIERS = frozenset(
    {
        "public",
        "protected",
        "private",
        "static",
        "final",
        "transient",
        "volatile",
        "abstract",
        "synchronized",
        "native",
        "default",
        "strictfp",
    }
)

WILDCARD_BOUNDS = ("extends", "super")

COLLECTION_TYPE_NAMES = frozenset(
    {
        "List",
        "ArrayList",
        "LinkedList",
        "Set",
        "HashSet",
        "LinkedHashSet",
        "SortedSet",
        "TreeSet",
        "Collection",
        "Iterable",
        "Iterator",
        "Stream",
        "Page",
        "Slice",
        "DataModel",
        "ListDataModel",
        "LazyDataModel",
    }
)

JAVA_PRIMITIVE_TYPES = frozenset(
    {"byte", "short", "int", "long", "float", "double", "boolean", "char", "void"}
)

BUILTIN_TYPE_NAMES = JAVA_PRIMITIVE_TYPES | frozenset(
    {
        "Byte",
        "Short",
        "Integer",
        "Long",
        "Float",
        "Double",
        "Boolean",
        "Character",
        "Number",
        "String",
        "Object",
        "Class",
        "BigDecimal",
        "BigInteger",
        "Date",
        "Calendar",
        "Timestamp",
        "LocalDate",
        "LocalDateTime",
        "LocalTime",
        "ZonedDateTime",
        "OffsetDateTime",
        "Instant",
        "Duration",
        "Period",
        "UUID",
    }
)

# (H) Directories and temporary files never worth a cache flush
IGNORE_PATTERNS = frozenset(
    {
        ".git",
        ".idea",
        ".vscode",
        "node_modules",
        "target",
        "build",
        "out",
        "bin",
        "__pycache__",
    }
)
IGNORE_SUFFIXES = frozenset({".tmp", "~", ".swp"})

# (H) Result dictionary keys
KEY_BEAN = "bean"
KEY_MEMBER = "member"
KEY_CLASS_NAME = "class_name"
KEY_METHOD_NAME = "method_name"
KEY_METHOD_LINE = "method_line"
KEY_FILE_PATH = "file_path"
KEY_LINE = "line"
KEY_LABEL = "label"
KEY_KIND = "kind"
KEY_INSERT_TEXT = "insert_text"
KEY_DETAIL = "detail"
KEY_REPLACE_RANGE = "replace_range"

DETAIL_BEAN = "{class_name} (bean)"
DETAIL_VARIABLE = "{tag_name} var -> {expression}"
DETAIL_METHOD = "{return_type} {name}({parameters})"
DETAIL_FIELD = "{type_text} {name}"
DETAIL_PROPERTY = "{type_text} (from {getter}())"
DETAIL_UNKNOWN_TYPE = "?"

# (H) CLI
CLI_APP_NAME = "elnav"
CLI_APP_HELP = (
    "Resolve and complete #{...} EL references in JSF markup against the "
    "managed beans declared in a Java workspace."
)
CLI_CMD_BEANS = "List the managed beans discovered under a workspace source root"
CLI_CMD_MEMBERS = "Show the member facts extracted from one Java source file"
CLI_CMD_HOVER = "Resolve the EL reference under a cursor to its bean member"
CLI_CMD_DEFINITION = "Resolve where the EL reference under a cursor is declared"
CLI_CMD_COMPLETE = "List completion items for the EL expression being typed"
CLI_HELP_WORKSPACE = "Workspace root (defaults to the current directory)"
CLI_HELP_WORKSPACE_ROOT = "Workspace root to index"
CLI_HELP_FILE = "Document to inspect"
CLI_HELP_JAVA_FILE = "Java source file to inspect"
CLI_HELP_LINE = "Zero-based line of the cursor"
CLI_HELP_CHARACTER = "Zero-based character of the cursor"
CLI_HELP_JSON = "Print the result as JSON"
CLI_HELP_VERBOSE = "Enable debug logging"
CLI_HELP_SOURCE_ROOT = "Source root relative to the workspace"
CLI_MSG_NO_RESULT = "No EL information at {line}:{character}."
CLI_MSG_NO_BEANS = "No managed beans found under {root}."
CLI_MSG_NO_MEMBERS = "No members found in {path}."
CLI_MSG_DEFINITION = "{path}:{line}"
CLI_COL_BEAN = "Bean"
CLI_COL_CLASS = "Class"
CLI_COL_FILE = "File"
CLI_COL_LABEL = "Label"
CLI_COL_KIND = "Kind"
CLI_COL_TYPE = "Type"
CLI_COL_DETAIL = "Detail"
CLI_COL_LINE = "Line"
CLI_COL_INSERT = "Insert"
CLI_COL_FIELD = "Field"
CLI_COL_VALUE = "Value"
CLI_TITLE_BEANS = "Managed beans ({count})"
CLI_TITLE_MEMBERS = "{class_name} members ({count})"
CLI_TITLE_COMPLETIONS = "Completions ({count})"
CLI_TITLE_HOVER = "{bean}.{member}"
CLI_HOVER_FIELDS = (
    ("Bean", KEY_BEAN),
    ("Member", KEY_MEMBER),
    ("Class", KEY_CLASS_NAME),
    ("Method", KEY_METHOD_NAME),
    ("Line", KEY_METHOD_LINE),
    ("File", KEY_FILE_PATH),
)
JSON_INDENT = 2

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
LOG_LEVEL_DEBUG = "DEBUG"
LOG_LEVEL_WARNING = "WARNING"
