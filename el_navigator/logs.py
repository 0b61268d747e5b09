from __future__ import annotations

# (H) Timing logs
FUNC_TIMING = "{func} took {time:.2f} ms"

# (H) Source scanning logs
SOURCE_ROOT_MISSING = "Source root does not exist: {path}"
SOURCE_ROOT_NESTED = "Using nested source root {relative} under {workspace}"
SOURCE_WALK_FAILED = "Cannot list {path}: {error}"
SOURCE_READ_FAILED = "Cannot read {path}: {error}"
SOURCE_DECODE_FALLBACK = "Decoding {path} as {encoding}"
SOURCE_STAT_FAILED = "Cannot stat {path}: {error}"

# (H) Index logs
BEAN_INDEX_BUILT = "Indexed {beans} bean names from {files} Java files under {root}"
CLASS_INDEX_BUILT = "Indexed {classes} class names from {files} Java files under {root}"
INDEX_CACHE_HIT = "{index} cache hit for {key} (age {age:.0f} ms)"
INDEX_CACHE_EXPIRED = "{index} cache expired for {key}, rebuilding"
CACHES_INVALIDATED = "Invalidated all EL caches"

# (H) Member extraction logs
MEMBERS_CACHE_HIT = "Member cache hit for {path}"
MEMBERS_EXTRACTED = "Extracted {count} members from {path}"

# (H) Resolution logs
BEAN_NOT_FOUND = "No bean named '{name}'"
BEAN_AMBIGUOUS = "Bean '{name}' declared {count} times, using {path}"
BINDING_SHADOWS_BEAN = "Local variable '{name}' bound by <{tag}> to #{{{expression}}}"
BINDING_TOO_DEEP = "Local binding chain too deep while resolving '{name}'"
MEMBER_NOT_FOUND = "No member '{member}' in {class_name}"
MEMBER_UNTYPED = "Member '{member}' of {class_name} has no resolvable type"
TYPE_BUILTIN = "Type {type_name} is built in, not resolvable to a source file"
TYPE_NOT_INDEXED = "Type {type_name} not found in the class index"
CHAIN_RESOLVED = "Resolved {path} to {class_name} ({file_path})"

# (H) Assistant logs
NOT_TARGET_DOCUMENT = "Skipping non-markup document {path}"
NO_WORKSPACE = "No workspace folder contains {path}"
HOVER_DISABLED = "Hover is disabled"
COMPLETION_DISABLED = "Completion is disabled"
NO_EL_AT_OFFSET = "No EL expression at offset {offset}"
NO_COMPLETION_CONTEXT = "No completion context at {line}:{character}"

# (H) File watcher logs
WATCHER_ACTIVE = "File watcher is now active."
WATCHER_CHANGE = "Change detected: {event_type} on {path}. Invalidating EL caches."
WATCHER_DEBOUNCED = "Debouncing {event_type} on {path} for {seconds}s"
WATCHER_STARTED = "Watching for Java changes in: {path}"
WATCHER_STOPPED = "File watcher stopped."
