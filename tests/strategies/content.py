"""Hypothesis strategies for content trees and translation data.

Event-Emitting Strategies (HypoFuzz-Optimized):
- translation_trees: Emits tree_shape=flat|nested and tree_languages=N

Python 3.13+.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

from contentl10n.content import InMemoryContentTree, make_container, make_item, make_settings
from contentl10n.naming import derive_key
from contentl10n.settings import SiteDefinition, StartPageSettingsResolver

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

# Cultures Babel knows with an English display name.
LANGUAGE_POOL = ["en", "fr", "de", "es", "nl", "sv", "fr-CA", "de-AT", "pt-BR"]

_LABEL_FIRST = string.ascii_letters
_LABEL_REST = string.ascii_letters + string.digits + " -_!.'"


@st.composite
def labels(draw: DrawFn) -> str:
    """Editor-typed labels whose derived key is a valid element name."""
    first = draw(st.sampled_from(_LABEL_FIRST))
    rest = draw(st.text(alphabet=_LABEL_REST, max_size=20))
    return first + rest


def culture_codes() -> st.SearchStrategy[str]:
    """Culture codes from the pool, in mixed separator and case forms."""
    return st.sampled_from(LANGUAGE_POOL).flatmap(
        lambda code: st.sampled_from([code, code.replace("-", "_"), code.lower(), code.upper()])
    )


def translation_texts() -> st.SearchStrategy[str]:
    """Translation text that XML 1.0 can carry."""
    return st.text(
        alphabet=st.characters(
            blacklist_categories=("Cs", "Cc"),
            blacklist_characters="￾￿",
        ),
        max_size=40,
    )


@st.composite
def lookup_keys(draw: DrawFn) -> str:
    """Lookup keys as callers write them: mixed case, optional slashes."""
    segments = draw(st.lists(labels().map(derive_key), min_size=1, max_size=4))
    key = "/".join(segment.upper() if draw(st.booleans()) else segment for segment in segments)
    if draw(st.booleans()):
        key = "/" + key
    if draw(st.booleans()):
        key += "/"
    return key


@dataclass
class GeneratedTree:
    """A generated site plus the translations it should serve.

    Attributes:
        tree: Content tree
        resolver: Settings resolver for site 'main'
        root_id: Translation root
        master: Master language
        languages: Languages of the root, master first
        expected: ``language -> {lookup key: translation}``
    """

    tree: InMemoryContentTree
    resolver: StartPageSettingsResolver
    root_id: int
    master: str
    languages: list[str]
    expected: dict[str, dict[str, str]] = field(default_factory=dict)


@st.composite
def translation_trees(draw: DrawFn, max_depth: int = 3) -> GeneratedTree:
    """Translation trees with unique keys per parent and full expectations.

    Every item exists in the master language and optionally in the others;
    expected values apply master-language fallback the way the store does.
    """
    master = draw(st.sampled_from(["en", "fr", "de"]))
    others = draw(
        st.lists(
            st.sampled_from([code for code in ("en", "fr", "de", "nl", "sv") if code != master]),
            unique=True,
            max_size=2,
        )
    )
    languages = [master, *others]

    tree = InMemoryContentTree()
    start_id = tree.next_id()
    root_id = tree.next_id()
    tree.add(make_settings(start_id, None, "Start", translations_root=root_id, language=master))
    tree.add(make_container(root_id, start_id, "Translations", language=master))
    for language in others:
        tree.add_language_variant(root_id, language)

    generated = GeneratedTree(
        tree=tree,
        resolver=StartPageSettingsResolver(
            tree, [SiteDefinition(site_id="main", name="Main", start_page=start_id)]
        ),
        root_id=root_id,
        master=master,
        languages=languages,
        expected={language: {} for language in languages},
    )
    nested = _fill(draw, generated, root_id, "", max_depth)
    event(f"tree_shape={'nested' if nested else 'flat'}")
    event(f"tree_languages={len(languages)}")
    return generated


def _fill(draw: DrawFn, generated: GeneratedTree, parent_id: int, path: str, depth: int) -> bool:
    tree = generated.tree
    child_labels = draw(
        st.lists(labels(), max_size=4, unique_by=lambda label: derive_key(label))
    )
    nested = False
    for label in child_labels:
        key = f"{path}/{derive_key(label)}"
        if depth > 1 and draw(st.booleans()):
            container = tree.add(
                make_container(tree.next_id(), parent_id, label, language=generated.master)
            )
            for language in generated.languages[1:]:
                tree.add_language_variant(container.content_id, language)
            before = {language: len(values) for language, values in generated.expected.items()}
            _fill(draw, generated, container.content_id, key, depth - 1)
            # Empty containers serialize as leaves with empty text.
            for language, values in generated.expected.items():
                if len(values) == before[language]:
                    values[key] = ""
            nested = True
            continue
        text = draw(translation_texts())
        item = tree.add(
            make_item(tree.next_id(), parent_id, label, translation=text, language=generated.master)
        )
        for language in generated.languages:
            generated.expected[language][key] = text
        for language in generated.languages[1:]:
            if draw(st.booleans()):
                localized = draw(translation_texts())
                tree.add_language_variant(item.content_id, language, translation=localized)
                generated.expected[language][key] = localized
    return nested
