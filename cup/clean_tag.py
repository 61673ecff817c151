"""Logic for turning a release tag into a bare version string."""


def clean_tag(tag: str) -> str:
    """Strip the v/V markers from tags such as ``v1.2.3``.

    Only tags that start with v or V are touched, but then every v and V in
    the tag is removed, so ``vversion`` becomes ``ersion``.
    """
    if tag[:1] in ("v", "V"):
        return tag.replace("v", "").replace("V", "")
    return tag
