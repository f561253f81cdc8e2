"""Per-service recognizers and the host dispatch table."""

from __future__ import annotations

from typing import Dict, Tuple

from .base import Recognizer
from .bugzilla import recognize_bug, recognize_phabricator
from .github import recognize as recognize_github
from .lints import recognize_lint
from .mozilla import recognize_hg, recognize_searchfox, recognize_treeherder
from .rustdoc import recognize_crate, recognize_docs_rs, recognize_std_docs
from .webgpu import recognize_cts

_BUILTIN_RECOGNIZERS: Dict[str, Tuple[Recognizer, ...]] = {
    "github.com": (recognize_github,),
    "bugzilla.mozilla.org": (recognize_bug,),
    "bugzil.la": (recognize_bug,),
    "phabricator.services.mozilla.com": (recognize_phabricator,),
    "crates.io": (recognize_crate,),
    "docs.rs": (recognize_docs_rs,),
    "doc.rust-lang.org": (recognize_std_docs,),
    "rust-lang.github.io": (recognize_lint,),
    "searchfox.org": (recognize_searchfox,),
    "treeherder.mozilla.org": (recognize_treeherder,),
    "gpuweb.github.io": (recognize_cts,),
    "hg.mozilla.org": (recognize_hg,),
    "hg-edge.mozilla.org": (recognize_hg,),
}


def recognizers_for_host(host: str) -> Tuple[Recognizer, ...]:
    """Return the recognizers registered for ``host``, in priority order."""
    return _BUILTIN_RECOGNIZERS.get(host.lower(), ())


def known_hosts() -> Tuple[str, ...]:
    return tuple(sorted(_BUILTIN_RECOGNIZERS))


__all__ = ["Recognizer", "known_hosts", "recognizers_for_host"]
