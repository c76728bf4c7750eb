import json

from wasmpack.npm_package import (
    CommonJSPackage,
    ESModulesPackage,
    NoModulesPackage,
    Repository,
    to_json,
)

REPO = Repository(ty="git", url="https://example.com/repo.git")


def _full_commonjs():
    return CommonJSPackage(
        name="js-hello-world",
        collaborators=["The wasm-pack developers"],
        description="so awesome rust+wasm package",
        version="0.1.0",
        license="WTFPL",
        repository=REPO,
        files=["js_hello_world_bg.wasm", "js_hello_world.js"],
        main="js_hello_world.js",
        homepage="https://example.com",
        types="js_hello_world.d.ts",
    )


def test_repository_uses_type_key():
    assert REPO.to_dict() == {"type": "git", "url": "https://example.com/repo.git"}


def test_commonjs_key_order():
    assert list(_full_commonjs().to_dict()) == [
        "name", "collaborators", "description", "version", "license",
        "repository", "files", "main", "homepage", "types",
    ]


def test_optional_and_empty_fields_skipped():
    pkg = CommonJSPackage(name="foo", version="0.1.0", main="foo.js")
    assert pkg.to_dict() == {"name": "foo", "version": "0.1.0", "main": "foo.js"}


def test_esmodules_always_has_side_effects():
    pkg = ESModulesPackage(name="foo", version="0.1.0", module="foo.js")
    data = pkg.to_dict()
    assert data["sideEffects"] is False
    assert data["module"] == "foo.js"
    assert "main" not in data


def test_nomodules_uses_browser_field():
    pkg = NoModulesPackage(name="foo", version="0.1.0", browser="foo.js", types="foo.d.ts")
    data = pkg.to_dict()
    assert data["browser"] == "foo.js"
    assert data["types"] == "foo.d.ts"
    assert "module" not in data


def test_json_round_trip():
    pkg = _full_commonjs()
    assert json.loads(to_json(pkg)) == pkg.to_dict()


def test_json_is_pretty_printed():
    text = to_json(NoModulesPackage(name="foo", version="0.1.0", browser="foo.js"))
    assert text.startswith("{\n  \"name\": \"foo\"")


def test_nested_repository_in_output():
    data = json.loads(to_json(_full_commonjs()))
    assert data["repository"]["type"] == "git"