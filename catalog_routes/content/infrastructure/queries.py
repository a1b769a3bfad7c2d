"""GROQ projections for each content type.

Every projection yields the flat shape `parse_entity` reads: `_id`, `slug` as a plain
string, `title`, and for brand-scoped types `brandRef` plus the dereferenced `brandSlug`.
Drafts are excluded by id path.
"""

PUBLISHED = '!(_id in path("drafts.**"))'

# CMS document type backing each content type.
DOCUMENT_TYPES: dict[str, str] = {
    "brand": "brandBasic",
    "product": "product",
    "solution": "solution",
    "article": "article",
    "support": "article",
}

GROQ_BY_TYPE: dict[str, str] = {
    "brand": (
        f'*[_type == "brandBasic" && {PUBLISHED}] | order(_id asc)'
        ' {_id, "slug": slug.current, "title": name, isActive}'
    ),
    "product": (
        f'*[_type == "product" && {PUBLISHED}] | order(_id asc)'
        ' {_id, "slug": slug.current, title, partNumber,'
        ' "brandRef": brand._ref, "brandSlug": brand->slug.current}'
    ),
    "solution": (
        f'*[_type == "solution" && {PUBLISHED}] | order(_id asc)'
        ' {_id, "slug": slug.current, title,'
        ' "brandRef": coalesce(primaryBrand._ref, relatedBrands[0]._ref),'
        ' "brandSlug": coalesce(primaryBrand->slug.current, relatedBrands[0]->slug.current)}'
    ),
    "article": (
        f'*[_type == "article" && {PUBLISHED}] | order(_id asc)'
        ' {_id, "slug": slug.current, title,'
        ' "brandRef": relatedBrands[0]._ref, "brandSlug": relatedBrands[0]->slug.current}'
    ),
    "support": (
        f'*[_type == "article" && {PUBLISHED} && defined(relatedBrands[0]._ref)] | order(_id asc)'
        ' {_id, "slug": slug.current, title,'
        ' "brandRef": relatedBrands[0]._ref, "brandSlug": relatedBrands[0]->slug.current}'
    ),
}


def is_draft_id(doc_id: str) -> bool:
    return doc_id.startswith("drafts.")
