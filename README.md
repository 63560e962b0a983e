# aiosu

Helpers for keeping a homebrew console's SD card up to date: telling which
custom firmware is running, handling controller colour profiles, downloading
files (MEGA links included), managing cheat files and building DeepSea
package requests.

## Installation

```
pip install aiosu
```

To run the tests:

```
pip install "aiosu[test]"
pytest
```

## Modules

### `aiosu.cfw`

- `Cfw`: enumeration of `AMS`, `RNX` and `SXOS`.
- `detect_cfw(has_service)`: given a callable that tells whether a named
  service is registered, returns `Cfw.RNX` for `"rnx"`, `Cfw.SXOS` for `"tx"`,
  otherwise `Cfw.AMS`.
- `ams_version_parts(version)`: splits a packed Atmosphère version word into
  `(major, minor, micro)`.
- `is_post_019(version)`: whether the version is 0.19 or newer (`None` gives
  `False`).
- `format_ams_info(version, emummc=None)`: text such as `1.2.3|E` (or `|S`),
  or `"Couldn't retrieve AMS version"` when the version is `None`.

### `aiosu.colors`

- `ColorProfile`: a frozen dataclass with `name`, `colors` and `is_backup`.
- `hex_to_bgr`, `bgr_to_hex`, `is_hex_color`: colour value conversion and
  `RRGGBB` validation.
- `parse_profiles(documents, keys)`: collects the profiles whose colours are
  all valid hex, puts the `_backup` profile first and names nameless ones
  `"Unamed"`.
- `joycon_profiles(local, remote=None)` and `procon_profiles(local, remote=None)`:
  profiles from a local document and a fetched one, with a built-in default
  list when nothing was fetched.
- `load_profiles_file(path)`: reads a profiles JSON file (a missing file gives
  an empty list).
- `joycon_backup(...)`, `procon_backup(main, sub)`: build a backup entry;
  `store_backup(path, backup)` replaces any previous backup in the file.

### `aiosu.download`

- `download_file(url, output=None, progress=None, session=None)`: downloads to
  a file or into memory and returns `(status, data)`. MEGA links are resolved
  through the MEGA API and decrypted with AES-CTR. Raises
  `InsufficientStorageError` when the file needs more than 2.5 times its size
  in free space.
- `Progress`: tracks step, bytes received, total and speed; set
  `interrupted` to stop a running download.
- `download_page(url, headers=None, body=None, session=None)`: returns
  `(status, text)`; a body makes it a POST. Headers may be a mapping or
  `"Name: value"` lines.
- `get_request(...)`: fetches and parses JSON, giving `{}` on any failure.
- `links_from_json(document)` and `get_links(url)`: `(name, url)` pairs of a
  JSON object, in order.
- `fetch_title(url)` and `extract_title_version(html)`: the five characters
  after the first space of a page's `<title>`, or `"-1"`.
- `mega_id`, `mega_node_key`, `mega_key`, `mega_iv`: MEGA link decoding.

### `aiosu.cheats`

- `format_title_id(tid)`: 16 upper-case hex digits.
- `cheats_title(cheat)`: titles joined as `[a] - [b]`.
- `cheat_names(path)`: the `[name]` / `{name}` header lines of a cheat file.
- `build_id_from_bytes(raw)`, `build_id_for_version(versions, version)`:
  build id text and lookup.
- `cheats_dir`, `write_cheats`, `delete_cheats`: cheat files under
  `<contents>/<TID>/cheats/<BID>.txt`.
- `versions_with_cheats(cheats_json)`, `latest_version(versions)`.

### `aiosu.deepsea`

- `sort_modules(modules)`: groups DeepSea modules by category, keeping order.
- `requirements_text(module, prefix)`, `repo_name(repo)`,
  `last_downloaded_modules(json_path)`.
- `build_request_url(base_url, modules)`: appends each distinct module,
  sorted, followed by `;`.
- `CustomPacks`: user-defined links by category, with `load`, `links`,
  `add_link`, `remove_link` and `save`.

## Example

```python
from aiosu.colors import hex_to_bgr
from aiosu.download import links_from_json

hex_to_bgr("82FF96")        # 0x96FF82
links_from_json({"Atmosphere": "https://example.com/ams.zip"})
# [("Atmosphere", "https://example.com/ams.zip")]
```

## Command

`aiosu-forwarder [root]` finishes a self-update on the SD card at `root`
(default `/`): it removes old `aio-switch-updater-v*` copies and their `.star`
files, moves a staged build from `config/aio-switch-updater/switch/...` into
`switch/aio-switch-updater/`, deletes the forwarder file and prints the path
of the application to launch next. From Python:
`aiosu.forwarder.relaunch_update(root)`.

```
aiosu-forwarder /media/sdcard
```

## What it does not do

There is no menu or other user interface. The package does not talk to the
console itself: it does not set controller colours, read the running
firmware's services, reboot to a payload, or launch the next application —
callers supply such values (service checks, colour words, version numbers)
and act on the results. It does not extract downloaded archives.