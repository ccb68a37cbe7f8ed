"""
Unit tests for release descriptor parsing and the metadata provider.
"""

import pytest

from plugsuite.core.errors import DescriptorError, MissingMandatoryMetadataError
from plugsuite.core.manifest import DescriptorMetadataProvider, ReleaseDescriptor
from plugsuite.core.registry import Author, ImageRef
from plugsuite.core.types import ArtifactIdentity, Module

DESCRIPTOR = """
[release]
line = "0.9.3"
registry = "site/plugins.json"

[[modules]]
namespace = "org.example"
name = "layout"
version = "1.0.2"
dependencies = ["org.example:layout-api:1.0.2", "org.host:graph-api:0.9.3"]

[modules.metadata]
name = "My Layout"
short_description = "Short"
long_description = "Long"
category = "Layout"
license = "Apache 2.0"
authors = [{ name = "Jane", email = "jane@example.org" }]
images = ["src/img/b.png", "src/img/a.jpg"]

[[modules]]
namespace = "org.example"
name = "layout-api"
version = "1.0.2"
release_line = "0.9.2"
path = "api"

[modules.metadata]
authors = "Jane, John"
"""


@pytest.fixture
def descriptor(tmp_path):
    path = tmp_path / "plugsuite.toml"
    path.write_text(DESCRIPTOR)
    return ReleaseDescriptor.load(path)


def test_load_missing_returns_empty(tmp_path):
    descriptor = ReleaseDescriptor.load(tmp_path / "plugsuite.toml")

    assert descriptor.modules == []
    assert not descriptor.has_modules()


def test_load_modules(descriptor, tmp_path):
    assert descriptor.release_line == "0.9.3"
    assert descriptor.registry_path == tmp_path.resolve() / "site" / "plugins.json"

    layout, api = descriptor.all_modules
    assert layout.identity == ArtifactIdentity("org.example", "layout", "1.0.2")
    assert layout.dependencies[1] == ArtifactIdentity("org.host", "graph-api", "0.9.3")
    assert layout.release_line == "0.9.3"
    assert api.release_line == "0.9.2"
    assert descriptor.modules[0].base_dir == tmp_path.resolve() / "layout"
    assert descriptor.modules[1].base_dir == tmp_path.resolve() / "api"


def test_load_invalid_toml(tmp_path):
    path = tmp_path / "plugsuite.toml"
    path.write_text("invalid [ toml")

    with pytest.raises(DescriptorError, match="Failed to parse"):
        ReleaseDescriptor.load(path)


def test_load_invalid_dependency(tmp_path):
    path = tmp_path / "plugsuite.toml"
    path.write_text("""
    [[modules]]
    namespace = "org.example"
    name = "a"
    version = "1.0"
    dependencies = ["not-a-coordinate"]
    """)

    with pytest.raises(DescriptorError, match="Invalid module #1"):
        ReleaseDescriptor.load(path)


def test_load_missing_name(tmp_path):
    path = tmp_path / "plugsuite.toml"
    path.write_text("""
    [[modules]]
    namespace = "org.example"
    version = "1.0"
    """)

    with pytest.raises(DescriptorError):
        ReleaseDescriptor.load(path)


def test_load_release_must_be_a_table(tmp_path):
    path = tmp_path / "plugsuite.toml"
    path.write_text('release = "0.9.3"\n')

    with pytest.raises(DescriptorError, match=r"Invalid \[release\]"):
        ReleaseDescriptor.load(path)


def test_load_modules_must_be_an_array(tmp_path):
    path = tmp_path / "plugsuite.toml"
    path.write_text('modules = "layout"\n')

    with pytest.raises(DescriptorError, match="Invalid modules"):
        ReleaseDescriptor.load(path)


class TestDescriptorMetadataProvider:
    def test_reads_metadata(self, descriptor):
        provider = DescriptorMetadataProvider(descriptor)
        metadata = provider(descriptor.all_modules[0])

        assert metadata.name == "My Layout"
        assert metadata.category == "Layout"
        assert metadata.authors == [Author(name="Jane", email="jane@example.org")]
        assert metadata.readme is None

    def test_images_sorted_and_renamed(self, descriptor):
        metadata = DescriptorMetadataProvider(descriptor)(descriptor.all_modules[0])

        assert metadata.images == [
            ImageRef(image="imgs/layout/a.png", thumbnail="imgs/layout/a-thumbnail.png"),
            ImageRef(image="imgs/layout/b.png", thumbnail="imgs/layout/b-thumbnail.png"),
        ]

    def test_comma_separated_authors(self, descriptor):
        metadata = DescriptorMetadataProvider(descriptor)(descriptor.all_modules[1])

        assert [a.name for a in metadata.authors] == ["Jane", "John"]

    def test_author_names_as_list(self, descriptor):
        descriptor.modules[0].metadata["authors"] = ["Jane Doe", "John Roe"]

        metadata = DescriptorMetadataProvider(descriptor)(descriptor.all_modules[0])

        assert metadata.authors == [Author(name="Jane Doe"), Author(name="John Roe")]

    def test_mixed_author_entries(self, descriptor):
        descriptor.modules[0].metadata["authors"] = ["Jane Doe", {"name": "John", "link": "https://john.example"}]

        metadata = DescriptorMetadataProvider(descriptor)(descriptor.all_modules[0])

        assert [a.name for a in metadata.authors] == ["Jane Doe", "John"]

    def test_invalid_author_entry_is_rejected(self, descriptor):
        descriptor.modules[0].metadata["authors"] = [5]

        with pytest.raises(MissingMandatoryMetadataError, match="Invalid author entry") as exc:
            DescriptorMetadataProvider(descriptor)(descriptor.all_modules[0])

        assert exc.value.field == "authors"

    def test_reads_readme(self, descriptor, tmp_path):
        (tmp_path / "layout").mkdir()
        (tmp_path / "layout" / "README.md").write_text("# My Layout\n")

        metadata = DescriptorMetadataProvider(descriptor)(descriptor.all_modules[0])

        assert metadata.readme == "# My Layout\n"

    def test_image_with_space_is_rejected(self, descriptor):
        descriptor.modules[0].metadata["images"] = ["src/img/my shot.png"]

        with pytest.raises(MissingMandatoryMetadataError, match="contains spaces"):
            DescriptorMetadataProvider(descriptor)(descriptor.all_modules[0])

    def test_unknown_module(self, descriptor):
        stranger = Module(ArtifactIdentity("org.x", "stranger", "1"))

        with pytest.raises(MissingMandatoryMetadataError):
            DescriptorMetadataProvider(descriptor)(stranger)
