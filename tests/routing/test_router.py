import unittest

from catalog_routes.routing.domain.locale import negotiate_locale, parse_accept_language
from catalog_routes.routing.domain.models import RouteContext, RouteDecision, RouterConfig
from catalog_routes.routing.domain.router import route
from catalog_routes.routing.infrastructure.http_adapter import to_http_response

UNPREFIXED = RouterConfig(enforce_locale_prefix=False)

SWEEP_PATHS = [
    "",
    "/",
    "/studio",
    "/studio?tab=desk",
    "/studio/",
    "/admin",
    "/api/revalidate",
    "/favicon.ico",
    "/_next/static/chunks/main",
    "/brands",
    "/brands/cree",
    "/brands/cree/products",
    "/brands/cree/products?page=2",
    "/brands/cree/solutions",
    "/brands/cree/support",
    "/brands/cree/articles",
    "/zh-CN",
    "/zh-CN/brands/cree/products",
    "/en/brands/cree/support",
    "/about",
    "about",
    "//double//slashes",
    "/%E0%A4%A",
    "/%zz/brands/%/products",
    "/EN/brands/x/products",
    "/brands/cree/products#specs",
]

CONTEXTS = [
    None,
    RouteContext(accept_language="en-US,en;q=0.9"),
    RouteContext(accept_language="de;q=0.2, ja;q=0.8"),
    RouteContext(locale_cookie="ko"),
    RouteContext(locale_cookie="xx", accept_language="garbage;;q=abc"),
]


class RouterRuleTests(unittest.TestCase):
    def test_admin_root_gets_trailing_slash(self):
        self.assertEqual(route("/studio"), RouteDecision.redirect("/studio/"))
        self.assertEqual(route("/studio/").action, "allow")
        self.assertEqual(route("/studio/desk/item").action, "allow")

    def test_admin_root_redirect_keeps_query(self):
        self.assertEqual(route("/studio?tab=desk").target, "/studio/?tab=desk")

    def test_backoffice_api_and_assets_pass_through(self):
        for path in ("/admin", "/admin/users", "/api", "/api/revalidate", "/robots.txt", "/_next/data/x", "/_vercel/insights"):
            with self.subTest(path=path):
                self.assertEqual(route(path).action, "allow")

    def test_prefix_match_needs_segment_boundary(self):
        decision = route("/administrators")
        self.assertEqual(decision.action, "redirect")
        self.assertEqual(decision.target, "/zh-CN/administrators")

    def test_root_redirects_to_default_locale(self):
        self.assertEqual(route("/"), RouteDecision.redirect("/zh-CN/"))
        self.assertEqual(route(""), RouteDecision.redirect("/zh-CN/"))

    def test_locale_negotiation_order(self):
        self.assertEqual(route("/", RouteContext(accept_language="en-US,en;q=0.9")).target, "/en/")
        self.assertEqual(route("/", RouteContext(locale_cookie="ja", accept_language="en")).target, "/ja/")
        self.assertEqual(route("/", RouteContext(locale_cookie="xx", accept_language="fr")).target, "/fr/")
        self.assertEqual(route("/", RouteContext(accept_language="pt-BR")).target, "/zh-CN/")

    def test_brand_section_redirect_adds_locale_and_slash_in_one_hop(self):
        decision = route("/brands/cree/products")
        self.assertEqual(decision, RouteDecision.redirect("/zh-CN/brands/cree/products/"))
        self.assertEqual(route(decision.target).action, "allow")

    def test_prefixed_brand_section_gets_trailing_slash(self):
        self.assertEqual(route("/en/brands/cree/support").target, "/en/brands/cree/support/")
        self.assertEqual(route("/en/brands/cree/support/").action, "allow")
        self.assertEqual(route("/zh-CN/brands/cree").action, "allow")
        self.assertEqual(route("/zh-CN/brands/cree/articles").action, "allow")

    def test_query_disables_trailing_slash_rule_but_survives_locale_redirect(self):
        decision = route("/brands/cree/products?page=2")
        self.assertEqual(decision.target, "/zh-CN/brands/cree/products?page=2")
        self.assertEqual(route(decision.target).action, "allow")
        self.assertEqual(route("/zh-CN/brands/cree/products?page=2").action, "allow")

    def test_locale_prefix_matches_case_insensitively_and_is_recased(self):
        decision = route("/EN/brands/x/products")
        self.assertEqual(decision, RouteDecision.redirect("/en/brands/x/products/"))
        self.assertEqual(route(decision.target).action, "allow")

        decision = route("/ZH-cn/about?x=1")
        self.assertEqual(decision, RouteDecision.redirect("/zh-CN/about?x=1"))
        self.assertEqual(route(decision.target).action, "allow")
        self.assertEqual(route("/Zh-Cn", config=UNPREFIXED), RouteDecision.redirect("/zh-CN"))

    def test_locale_lookalike_is_not_a_prefix(self):
        decision = route("/english/about")
        self.assertEqual(decision.target, "/zh-CN/english/about")

    def test_malformed_input_never_raises(self):
        for path in ("/%E0%A4%A", "%%%", "/\x00", "?only=query", "#frag"):
            with self.subTest(path=path):
                decision = route(path)
                self.assertIn(decision.action, ("allow", "redirect"))

    def test_every_redirect_target_is_a_fixed_point(self):
        configs = [RouterConfig(), UNPREFIXED]
        for config in configs:
            for context in CONTEXTS:
                for path in SWEEP_PATHS:
                    with self.subTest(path=path, context=context, enforce=config.enforce_locale_prefix):
                        decision = route(path, context, config)
                        if decision.action == "redirect":
                            self.assertEqual(route(decision.target, context, config).action, "allow")


class UnprefixedRouterTests(unittest.TestCase):
    def test_brand_subpath_trailing_slash(self):
        self.assertEqual(route("/brands/cree/products", config=UNPREFIXED), RouteDecision.redirect("/brands/cree/products/"))
        self.assertEqual(route("/brands/cree/products/", config=UNPREFIXED).action, "allow")
        self.assertEqual(route("/brands/cree", config=UNPREFIXED).action, "allow")

    def test_other_paths_fall_through(self):
        self.assertEqual(route("/brands/cree/articles", config=UNPREFIXED).action, "allow")
        self.assertEqual(route("/about", config=UNPREFIXED).action, "allow")
        self.assertEqual(route("/studio", config=UNPREFIXED).target, "/studio/")


class LocaleNegotiationTests(unittest.TestCase):
    LOCALES = ("zh-CN", "zh-TW", "en", "ja")

    def test_parse_accept_language_orders_by_quality(self):
        self.assertEqual(parse_accept_language("fr;q=0.5, de, *;q=0.1, en;q=0"), ["de", "fr"])
        self.assertEqual(parse_accept_language(None), [])
        self.assertEqual(parse_accept_language("en;q=abc"), [])

    def test_exact_match_beats_primary_subtag(self):
        self.assertEqual(negotiate_locale(self.LOCALES, "zh-CN", accept_language="zh-tw"), "zh-TW")
        self.assertEqual(negotiate_locale(self.LOCALES, "zh-CN", accept_language="zh"), "zh-CN")
        self.assertEqual(negotiate_locale(self.LOCALES, "zh-CN", accept_language="en-GB"), "en")

    def test_falls_back_to_default(self):
        self.assertEqual(negotiate_locale(self.LOCALES, "zh-CN"), "zh-CN")
        self.assertEqual(negotiate_locale(self.LOCALES, "zh-CN", cookie="ko", accept_language="ru"), "zh-CN")


class HttpAdapterTests(unittest.TestCase):
    def test_redirect_sets_location(self):
        self.assertEqual(to_http_response(route("/studio")), (308, {"Location": "/studio/"}))
        self.assertEqual(to_http_response(route("/studio"), status=301), (301, {"Location": "/studio/"}))

    def test_allow_and_rewrite(self):
        self.assertEqual(to_http_response(RouteDecision.allow()), (200, {}))
        self.assertEqual(
            to_http_response(RouteDecision(action="rewrite", target="/zh-CN/about")),
            (200, {"X-Rewrite-Path": "/zh-CN/about"}),
        )

    def test_redirect_rejects_non_redirect_status(self):
        with self.assertRaises(ValueError):
            to_http_response(RouteDecision.redirect("/x/"), status=200)


if __name__ == "__main__":
    unittest.main()
