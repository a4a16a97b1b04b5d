from __future__ import annotations

from pathlib import Path

import pytest

from rustprebuilts.core.result import Err, Ok
from rustprebuilts.host.registry import load_module
from rustprebuilts.platform.detection import BuildOS
from rustprebuilts.prebuilts.modules import (
    FILEGROUP_MODULE_TYPE,
    LIBRARY_MODULE_TYPE,
    STATIC_LIBRARY_MODULE_TYPE,
    default_registry,
    rust_host_prebuilt_sysroot_library_factory,
)


def _touch(root: Path, rel_dir: str, *names: str) -> None:
    d = root / rel_dir
    d.mkdir(parents=True, exist_ok=True)
    for name in names:
        (d / name).write_bytes(b"")


def _glibc_tree(root: Path, version: str) -> None:
    for triple in ("x86_64-unknown-linux-gnu", "i686-unknown-linux-gnu"):
        _touch(
            root,
            f"linux-x86/{version}/lib/rustlib/{triple}/lib",
            "libstd-abc123.rlib",
            "libstd-abc123.so",
        )


def test_registry_lists_module_types() -> None:
    assert default_registry().names() == [
        FILEGROUP_MODULE_TYPE,
        LIBRARY_MODULE_TYPE,
        STATIC_LIBRARY_MODULE_TYPE,
    ]


def test_registering_twice_fails() -> None:
    registry = default_registry()
    with pytest.raises(ValueError):
        registry.register(LIBRARY_MODULE_TYPE, rust_host_prebuilt_sysroot_library_factory)


def test_library_module_end_to_end(tmp_path: Path) -> None:
    _glibc_tree(tmp_path, "1.70.0")
    module = default_registry().create(LIBRARY_MODULE_TYPE, "prebuilt_libstd.rust_sysroot")
    assert module is not None

    result = load_module(
        module,
        module_dir=tmp_path,
        build_os=BuildOS.LINUX,
        environ={"RUST_PREBUILTS_VERSION": "1.70.0"},
    )

    assert isinstance(result, Ok)
    assert len(module.appended) == 1
    props = module.effective_properties()
    assert props["enabled"] is False
    target = props["target"]
    assert isinstance(target, dict)

    x64 = target["linux_glibc_x86_64"]
    lib_dir = "linux-x86/1.70.0/lib/rustlib/x86_64-unknown-linux-gnu/lib"
    assert x64["enabled"] is True
    assert x64["rlib"] == {"srcs": [f"{lib_dir}/libstd-abc123.rlib"]}
    assert x64["dylib"] == {"srcs": [f"{lib_dir}/libstd-abc123.so"]}
    assert x64["suffix"] == "abc123"
    assert x64["link_dirs"] == [lib_dir]

    for key in ("linux_musl_x86_64", "linux_musl_x86", "darwin_x86_64"):
        assert target[key]["enabled"] is False
        assert target[key]["rlib"] == {"srcs": []}


def test_configured_version_used_without_env(tmp_path: Path) -> None:
    _glibc_tree(tmp_path, "1.75.0")
    module = default_registry().create(LIBRARY_MODULE_TYPE, "libstd")
    assert module is not None

    result = load_module(
        module,
        module_dir=tmp_path,
        build_os=BuildOS.LINUX,
        environ={},
        configured_version="1.75.0",
    )

    assert isinstance(result, Ok)


def test_library_module_reports_locate_error(tmp_path: Path) -> None:
    module = default_registry().create(LIBRARY_MODULE_TYPE, "prebuilt_libstd")
    assert module is not None

    result = load_module(
        module,
        module_dir=tmp_path,
        build_os=BuildOS.DARWIN,
        environ={"RUST_PREBUILTS_VERSION": "1.70.0"},
    )

    assert isinstance(result, Err)
    assert len(result.error) == 1
    message = result.error[0]
    assert message.startswith("prebuilt_libstd: Unexpected number of matches")
    assert "darwin-x86/1.70.0/lib/rustlib/x86_64-apple-darwin/lib/libstd-*.rlib" in message
    assert "found 0 matches" in message
    assert module.appended == []


def test_static_module_needs_only_rlib(tmp_path: Path) -> None:
    _touch(
        tmp_path,
        "darwin-x86/1.70.0/lib/rustlib/x86_64-apple-darwin/lib",
        "libcore-77.rlib",
    )
    module = default_registry().create(STATIC_LIBRARY_MODULE_TYPE, "libcore.rust_sysroot_static")
    assert module is not None

    result = load_module(
        module,
        module_dir=tmp_path,
        build_os=BuildOS.DARWIN,
        environ={"RUST_PREBUILTS_VERSION": "1.70.0"},
    )

    assert isinstance(result, Ok)
    target = module.effective_properties()["target"]
    assert isinstance(target, dict)
    assert target["darwin_x86_64"]["dylib"] == {"srcs": []}
    assert target["darwin_x86_64"]["suffix"] == "77"


def test_filegroup_prefixes_sources(tmp_path: Path) -> None:
    module = default_registry().create(
        FILEGROUP_MODULE_TYPE,
        "rust_toolchain_src",
        {"toolchain_srcs": ["lib/libLLVM.so", "bin/rust-lld"]},
    )
    assert module is not None

    result = load_module(
        module,
        module_dir=tmp_path,
        build_os=BuildOS.LINUX_MUSL,
        environ={"RUST_PREBUILTS_VERSION": "1.70.0"},
    )

    assert isinstance(result, Ok)
    prefix = "linux-musl-x86/1.70.0/lib/rustlib/x86_64-unknown-linux-musl"
    assert module.effective_properties()["srcs"] == [
        f"{prefix}/lib/libLLVM.so",
        f"{prefix}/bin/rust-lld",
    ]


def test_filegroup_appends_to_declared_srcs(tmp_path: Path) -> None:
    module = default_registry().create(
        FILEGROUP_MODULE_TYPE,
        "rust_toolchain_src",
        {"srcs": ["extra.txt"], "toolchain_srcs": ["bin/rust-lld"]},
    )
    assert module is not None

    load_module(
        module,
        module_dir=tmp_path,
        build_os=BuildOS.DARWIN,
        environ={"RUST_PREBUILTS_VERSION": "1.70.0"},
    )

    assert module.effective_properties()["srcs"] == [
        "extra.txt",
        "darwin-x86/1.70.0/lib/rustlib/x86_64-apple-darwin/bin/rust-lld",
    ]


def test_filegroup_unknown_host_is_an_error(tmp_path: Path) -> None:
    module = default_registry().create(
        FILEGROUP_MODULE_TYPE, "rust_toolchain_src", {"toolchain_srcs": ["bin/rustc"]}
    )
    assert module is not None

    result = load_module(module, module_dir=tmp_path, build_os=BuildOS.UNKNOWN, environ={})

    assert isinstance(result, Err)
    assert "no prebuilt toolchain" in result.error[0]


def test_filegroup_rejects_non_list_sources(tmp_path: Path) -> None:
    module = default_registry().create(
        FILEGROUP_MODULE_TYPE, "rust_toolchain_src", {"toolchain_srcs": "bin/rustc"}
    )
    assert module is not None

    result = load_module(module, module_dir=tmp_path, build_os=BuildOS.LINUX, environ={})

    assert isinstance(result, Err)
