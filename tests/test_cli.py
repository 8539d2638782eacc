"""
Tests for CLI commands.
"""

import json

import yaml
from typer.testing import CliRunner

from remix_migrate.cli import app


runner = CliRunner()


def write_imports(path, entries):
    path.write_text(json.dumps(entries))
    return path


class TestInit:
    def test_init_writes_config(self, tmp_path):
        result = runner.invoke(app, ["init", str(tmp_path)])

        assert result.exit_code == 0
        assert (tmp_path / "remix-migrate.yaml").exists()
        assert "Wrote configuration" in result.output

    def test_init_refuses_to_overwrite(self, tmp_path):
        (tmp_path / "remix-migrate.yaml").write_text("client: react\n")

        result = runner.invoke(app, ["init", str(tmp_path)])

        assert result.exit_code == 1
        assert "--force" in result.output
        assert (tmp_path / "remix-migrate.yaml").read_text() == "client: react\n"

    def test_init_force(self, tmp_path):
        (tmp_path / "remix-migrate.yaml").write_text("client: react\n")

        result = runner.invoke(app, ["init", str(tmp_path), "--force"])

        assert result.exit_code == 0
        assert "output" in (tmp_path / "remix-migrate.yaml").read_text()


class TestResolve:
    def test_resolve_adapter(self, tmp_path, package_json):
        package_json({"@remix-run/cloudflare-pages": "1.3.0"})

        result = runner.invoke(app, ["resolve", "--project", str(tmp_path)])

        assert result.exit_code == 0
        assert "@remix-run/cloudflare" in result.output
        assert "@remix-run/cloudflare-pages" in result.output

    def test_resolve_serve(self, tmp_path, package_json):
        package_json({"@remix-run/serve": "1.3.0"})

        result = runner.invoke(app, ["resolve", "--project", str(tmp_path)])

        assert result.exit_code == 0
        assert "@remix-run/node" in result.output
        assert "none" in result.output

    def test_multiple_adapters_exit_1(self, tmp_path, package_json):
        package_json({"@remix-run/express": "1.3.0", "@remix-run/vercel": "1.3.0"})

        result = runner.invoke(app, ["resolve", "--project", str(tmp_path)])

        assert result.exit_code == 1
        assert "multiple Remix server adapters" in result.output
        assert "@remix-run/express" in result.output
        assert "@remix-run/vercel" in result.output
        assert "Uninstall unused server adapter packages" in " ".join(result.output.split())

    def test_prompt_selection(self, tmp_path, package_json):
        package_json({"@remix-run/react": "1.3.0"})

        result = runner.invoke(app, ["resolve", "--project", str(tmp_path)], input="1\n")

        assert result.exit_code == 0
        assert "Which server runtime is this project using?" in result.output
        assert "@remix-run/cloudflare" in result.output

    def test_prompt_cancel_exits_cleanly(self, tmp_path, package_json):
        package_json({})

        result = runner.invoke(app, ["resolve", "--project", str(tmp_path)], input="4\n")

        assert result.exit_code == 0
        assert "Migration cancelled" in result.output
        assert "Runtime:" not in result.output

    def test_missing_manifest(self, tmp_path):
        result = runner.invoke(app, ["resolve", "--project", str(tmp_path)])

        assert result.exit_code == 1
        assert "No package.json found" in result.output


class TestClassify:
    def test_classify_json(self, tmp_path, package_json):
        package_json({"@remix-run/vercel": "1.3.0"})
        imports = write_imports(
            tmp_path / "imports.json",
            ["createRequestHandler", "useCatch", {"name": "ActionFunction", "isTypeOnly": True}, "x"],
        )

        result = runner.invoke(
            app,
            ["classify", "--project", str(tmp_path), "--imports", str(imports), "--format", "json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["adapter"] == "vercel"
        assert data["runtime"] == "node"
        assert data["imports"] == {
            "vercel": [{"name": "createRequestHandler", "isTypeOnly": False}],
            "react": [{"name": "useCatch", "isTypeOnly": False}],
            "node": [{"name": "ActionFunction", "isTypeOnly": True}],
            "legacy": [{"name": "x", "isTypeOnly": False}],
        }

    def test_classify_yaml_from_config(self, tmp_path, package_json):
        package_json(postinstall="remix setup cloudflare")
        (tmp_path / "remix-migrate.yaml").write_text("output:\n  format: yaml\n")
        imports = write_imports(tmp_path / "imports.json", ["createCloudflareKVSessionStorage"])

        result = runner.invoke(
            app, ["classify", "--project", str(tmp_path), "--imports", str(imports)]
        )

        assert result.exit_code == 0
        data = yaml.safe_load(result.stdout)
        assert data["adapter"] is None
        assert data["runtime"] == "cloudflare"
        assert data["imports"]["cloudflare"] == [
            {"name": "createCloudflareKVSessionStorage", "isTypeOnly": False}
        ]

    def test_classify_table(self, tmp_path, package_json):
        package_json({"@remix-run/serve": "1.3.0"})
        imports = write_imports(tmp_path / "imports.json", ["json", "Form"])

        result = runner.invoke(
            app, ["classify", "--project", str(tmp_path), "--imports", str(imports)]
        )

        assert result.exit_code == 0
        assert "Import routing" in result.output
        assert "@remix-run/node" in result.output
        assert "@remix-run/react" in result.output
        assert "remix" in result.output

    def test_classify_writes_out_file(self, tmp_path, package_json):
        package_json({"@remix-run/serve": "1.3.0"})
        imports = write_imports(tmp_path / "imports.json", ["json"])
        out = tmp_path / "routing.json"

        result = runner.invoke(
            app,
            ["classify", "--project", str(tmp_path), "--imports", str(imports), "--out", str(out)],
        )

        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert data["imports"]["node"] == [{"name": "json", "isTypeOnly": False}]

    def test_unknown_client(self, tmp_path, package_json):
        package_json({"@remix-run/serve": "1.3.0"})
        imports = write_imports(tmp_path / "imports.json", ["json"])

        result = runner.invoke(
            app,
            ["classify", "--project", str(tmp_path), "--imports", str(imports), "--client", "vue"],
        )

        assert result.exit_code == 1
        assert "Unknown client package: vue" in result.output

    def test_unsupported_format(self, tmp_path, package_json):
        package_json({"@remix-run/serve": "1.3.0"})
        imports = write_imports(tmp_path / "imports.json", ["json"])

        result = runner.invoke(
            app,
            ["classify", "--project", str(tmp_path), "--imports", str(imports), "--format", "csv"],
        )

        assert result.exit_code == 1
        assert "Unsupported format" in result.output

    def test_invalid_config(self, tmp_path, package_json):
        package_json({"@remix-run/serve": "1.3.0"})
        (tmp_path / "remix-migrate.yaml").write_text("client: vue\n")
        imports = write_imports(tmp_path / "imports.json", ["json"])

        result = runner.invoke(
            app, ["classify", "--project", str(tmp_path), "--imports", str(imports)]
        )

        assert result.exit_code == 1
        assert "Invalid configuration file" in result.output

    def test_ambiguous_adapter(self, tmp_path, package_json):
        package_json({"@remix-run/architect": "1.3.0", "@remix-run/netlify": "1.3.0"})
        imports = write_imports(tmp_path / "imports.json", ["json"])

        result = runner.invoke(
            app, ["classify", "--project", str(tmp_path), "--imports", str(imports)]
        )

        assert result.exit_code == 1
        assert "@remix-run/architect" in result.output

    def test_cancel(self, tmp_path, package_json):
        package_json({})
        imports = write_imports(tmp_path / "imports.json", ["json"])

        result = runner.invoke(
            app,
            ["classify", "--project", str(tmp_path), "--imports", str(imports)],
            input="4\n",
        )

        assert result.exit_code == 0
        assert "Migration cancelled" in result.output
        assert "Import routing" not in result.output

    def test_verbose_flag(self, tmp_path, package_json):
        package_json({"@remix-run/serve": "1.3.0"})

        result = runner.invoke(app, ["--verbose", "resolve", "--project", str(tmp_path)])

        assert result.exit_code == 0
        assert "inferred from @remix-run/serve" in result.output

    def test_without_verbose_hides_info_logs(self, tmp_path, package_json):
        package_json({"@remix-run/serve": "1.3.0"})

        result = runner.invoke(app, ["resolve", "--project", str(tmp_path)])

        assert result.exit_code == 0
        assert "inferred from" not in result.output


class TestMachineReadableOutput:
    """JSON/YAML output on stdout must parse even when status text is shown."""

    def test_json_with_out_file(self, tmp_path, package_json):
        package_json({"@remix-run/serve": "1.3.0"})
        imports = write_imports(tmp_path / "imports.json", ["json"])
        out = tmp_path / "routing.json"

        result = runner.invoke(
            app,
            [
                "classify",
                "--project",
                str(tmp_path),
                "--imports",
                str(imports),
                "--format",
                "json",
                "--out",
                str(out),
            ],
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == json.loads(out.read_text())
        assert "Routing written to" in result.stderr

    def test_json_after_runtime_prompt(self, tmp_path, package_json):
        package_json({})
        imports = write_imports(tmp_path / "imports.json", ["json", "Form"])

        result = runner.invoke(
            app,
            ["classify", "--project", str(tmp_path), "--imports", str(imports), "--format", "json"],
            input="3\n",
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["runtime"] == "node"
        assert data["imports"]["node"] == [{"name": "json", "isTypeOnly": False}]
        assert "Which server runtime is this project using?" in result.stderr

    def test_yaml_after_runtime_prompt(self, tmp_path, package_json):
        package_json({})
        imports = write_imports(tmp_path / "imports.json", ["redirect"])

        result = runner.invoke(
            app,
            ["classify", "--project", str(tmp_path), "--imports", str(imports), "--format", "yaml"],
            input="1\n",
        )

        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout)["runtime"] == "cloudflare"

    def test_errors_go_to_stderr(self, tmp_path):
        result = runner.invoke(app, ["resolve", "--project", str(tmp_path)])

        assert result.exit_code == 1
        assert result.stdout == ""
        assert "No package.json found" in result.stderr


class TestClosedInput:
    def test_end_of_input_at_prompt_cancels(self, tmp_path, package_json):
        package_json({})

        result = runner.invoke(app, ["resolve", "--project", str(tmp_path)], input="")

        assert result.exit_code == 0
        assert "Migration cancelled" in result.output
        assert "may be a bug" not in result.output

    def test_undecodable_imports_file(self, tmp_path, package_json):
        package_json({"@remix-run/serve": "1.3.0"})
        imports = tmp_path / "imports.json"
        imports.write_bytes(b'["\xff"]')

        result = runner.invoke(
            app, ["classify", "--project", str(tmp_path), "--imports", str(imports)]
        )

        assert result.exit_code == 1
        assert "Cannot read imports from" in result.output
        assert "may be a bug" not in result.output
