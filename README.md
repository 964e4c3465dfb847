# leafbridge

A library for describing, validating and reporting on software deployments.
A deployment declares applications, conditions, commands, packages, locks,
registry and file-system resources, and the flows of actions that tie them
together. The package models that configuration, checks it for mistakes,
resolves resource references to local locations, and formats the events a
deployment run records.

It has no dependencies outside the standard library and needs Python 3.11
or later.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

### Deployment model

- `leafbridge.deployment`: `Deployment`, with `validate()` and
  `validate_condition(condition_id)`. Both raise `DeploymentConfigError`:
  for a missing deployment ID, an unknown condition ID, or a condition
  (or one of its `any_of` / `all_of` subconditions) that has no type, has
  more than one of type/any/all, has an unrecognized type, or refers to a
  subject that is not defined in the deployment. `validate_deployment_id()`
  checks an ID on its own.
- `leafbridge.conditions`: `Condition`, `ConditionList`, `ConditionType`,
  `ConditionUse` (with `plural()`), `ConditionElement`, `ConditionError`
  and `condition_self_error()`.
- `leafbridge.packages`: `Package` (`is_archive()`, `file_name()`,
  `file_extension()`, `validate()`), `PackageSource`, `PackageSourceType`,
  `PackageFile`, `PackageContent` and `validate_package_id()`. Validation
  failures raise `PackageConfigError`.
- `leafbridge.resources`: `Resources`, grouping processes, mutexes, locks,
  registry, file-system and package resources. `validate()` validates each
  package and raises `PackageConfigError`.
- `leafbridge.apps`: `AppList` (with `difference()`), `Application`,
  `AppDetection`, `AppEvaluation` and `AppSummary`. `AppSummary.error()`
  returns an `AppChangeError` when expected installs or uninstalls did not
  happen; `AppSummary.check()` raises it.
- `leafbridge.commands`: `Command`, `CommandType` (`is_app_based()`,
  `is_msi()`), `ExitCodeInfo` and `CommandResult`.
- `leafbridge.flows`: `Flow`, `Action`, `ActionType`, `Behavior`,
  `OnErrorBehavior`, `overlay_behavior()`, `FlowStats`, `Lock` and
  `LockConflictRules`.
- `leafbridge.sysresources`: `Mutex` (with `object_name()`, which raises
  `MutexConfigError` for a missing or unknown namespace), `MutexNamespace`,
  `ProcessResource`, `ProcessMatch`, `ProcessAttribute` and `MatchType`.
- `leafbridge.fileattributes`: `FileAttributes` (`features()`,
  `validate()`) and `equal_file_attributes()`.

### Resolving resources

- `leafbridge.filesystem`: `FileSystemResources.resolve_directory()` and
  `resolve_file()` follow each resource's `location` up to a known folder
  (`program-files`, `program-data`, `system`, ...) and return `DirRef` or
  `FileRef`. `ResolutionError` is raised for undefined entries, missing
  locations and cycles. `DirRef.path()` and `FileRef.path()` build a
  Windows-style path from environment variables such as `ProgramFiles`
  (taken from `os.environ` unless a mapping is passed). `localize()` turns
  a slash-separated relative path into a Windows path and rejects paths
  that are not local.
- `leafbridge.registry`: `RegistryResources.resolve_key()` and
  `resolve_value()` resolve registry resources against well-known roots
  (`software`, under `HKEY_LOCAL_MACHINE`) and return `RegistryKeyRef` or
  `RegistryValueRef`; `RegistryKeyRef.path()` gives the full key path.

### Utilities

- `leafbridge.version`: `Version` (`segments()`, `canonical()`),
  `compare_versions()` and `compare_version_segments()`.
- `leafbridge.filehash`: `HashType`, `HashValue`, `Entry`, `HashList`,
  `HashMap`, `compare_types()`, `compare_entries()` and
  `parse_hash_value()`. Entries order with `sha3-256` first.
- `leafbridge.bytesconv`: `decode_string()` turns raw bytes into text. It
  honours a UTF-16 byte order mark, accepts UTF-8, then tries UTF-16 LE and
  BE, and falls back to unpadded URL-safe Base64. `parse_utf16()` is strict
  and raises `InvalidUTF16Error` or `UnevenUTF16Error`; `decode_utf16()`
  replaces bad sequences instead.
- `leafbridge.reentrantlock`: `ReentrantLock` wraps any object that
  satisfies the `Locker` protocol (`lock`, `try_lock`, `unlock`, `close`)
  so it can be acquired repeatedly; it is also a context manager.
- `leafbridge.textfmt`: `StructBuilder`, `plural()`, `bitrate()` and
  `format_duration()`, used to build event messages.

### Events

`leafbridge.action_events`, `leafbridge.command_events`,
`leafbridge.flow_events` and `leafbridge.file_events` hold event records
(`ActionStarted`, `CommandStopped`, `FlowCondition`, `FileCopy`, ...). Each
has `component()`, `level()` (a `logging` level), `message()`, `details()`
and `attrs()` (a dict of structured attributes).

## Example

```python
from leafbridge.version import Version, compare_versions

compare_versions(Version("v1.2"), Version("1.10"))   # -1
Version("v52.21A").canonical()                        # "52.21A"

from leafbridge.bytesconv import decode_string

decode_string(b"\xff\xfeh\x00i\x00")                  # "hi"
```

```python
from leafbridge.deployment import Deployment

deployment = Deployment(id="example-app", name="Example App")
deployment.validate()
```

## What it does not do

This is a library, with no command-line tool. It does not carry out a
deployment: it does not run flows, download or extract packages, invoke
commands, evaluate conditions against the running system, acquire system
mutexes, or read the registry. It describes and validates deployments,
resolves resource references to paths, and formats the events a runner
would record.