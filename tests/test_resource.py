import pytest

from shopify_resource import (
    MISSING,
    ConfigurationError,
    HasMany,
    HasOne,
    IncludesMany,
    IncludesOne,
    Product,
    RelationalAccessError,
    Resource,
    ResourceCollection,
    TransportError,
    UnsavedResourceError,
    Variant,
)


class ThemeResource(Resource):
    path = "themes"
    name = "theme"
    name_plural = "themes"

    assets = IncludesMany("AssetResource")


class AssetResource(Resource):
    path = "assets"
    name = "asset"
    name_plural = "assets"

    theme = HasOne(ThemeResource, params=lambda: {"role": "main"})
    themes = HasMany(ThemeResource)


class PageResource(Resource):
    path = "pages"
    name = "page"
    name_plural = "pages"

    theme = IncludesOne(ThemeResource)
    layout = IncludesOne(ThemeResource, key="layout_theme_id")


class TestBuildPath:
    def test_collection(self):
        assert Product.build_path() == "/admin/products.json"

    def test_single(self):
        assert Product.build_path(123) == "/admin/products/123.json"

    def test_through_instance(self):
        parent = ThemeResource.build_resource({"id": 8})
        assert AssetResource.build_path(through=parent) == (
            "/admin/themes/8/assets.json"
        )

    def test_through_string(self):
        assert AssetResource.build_path(5, through="products/1234") == (
            "/admin/products/1234/assets/5.json"
        )

    def test_through_unsaved_instance(self):
        parent = ThemeResource({"name": "Draft"})
        with pytest.raises(UnsavedResourceError, match="save it first"):
            AssetResource.build_path(through=parent)

    def test_through_instance_with_null_id(self):
        parent = ThemeResource.build_resource({"id": None})
        with pytest.raises(ValueError):
            AssetResource.build_path(through=parent)


class TestFind:
    def test_find(self, transport):
        transport.queue({"product": {"id": 123, "title": "Shirt"}})

        product = Product.find(123)

        assert transport.calls == [("GET", "/admin/products/123.json", {})]
        assert isinstance(product, Product)
        assert not product.is_new()
        assert product.is_existing()
        assert product["title"] == "Shirt"

    def test_find_through(self, transport):
        transport.queue({"asset": {"id": 4, "key": "layout/theme.liquid"}})
        theme = ThemeResource.build_resource({"id": 9})

        asset = AssetResource.find_through(4, theme, {"fields": "key"})

        assert transport.calls == [
            ("GET", "/admin/themes/9/assets/4.json", {"fields": "key"})
        ]
        assert asset["key"] == "layout/theme.liquid"

    def test_no_connection(self):
        with pytest.raises(ConfigurationError):
            Product.find(1)

    def test_explicit_connection(self, transport, make_transport):
        other = make_transport({"product": {"id": 1}})

        product = Product.find(1, connection=other)

        assert other.calls == [("GET", "/admin/products/1.json", {})]
        assert transport.calls == []
        assert product.connection is other

    def test_transport_errors_propagate(self, mocker):
        failing = mocker.Mock()
        failing.rest.side_effect = TransportError(404)

        with pytest.raises(TransportError):
            Product.find(1, connection=failing)


class TestAll:
    def test_all(self, transport):
        transport.queue(
            {"products": [{"id": 3}, {"id": 1}, {"id": 2}, {"id": 1}]}
        )

        products = Product.all({"limit": 4})

        assert transport.calls == [
            ("GET", "/admin/products.json", {"limit": 4})
        ]
        assert isinstance(products, ResourceCollection)
        assert [p["id"] for p in products] == [3, 1, 2, 1]
        assert products[1] is not products[3]

    def test_all_through_instance(self, transport):
        transport.queue({"assets": [{"key": "a"}, {"key": "b"}]})
        theme = ThemeResource.build_resource({"id": 8})

        assets = AssetResource.all_through(theme)

        assert transport.calls == [("GET", "/admin/themes/8/assets.json", {})]
        assert [a["key"] for a in assets] == ["a", "b"]

    def test_all_through_string(self, transport):
        transport.queue({"assets": []})

        assets = AssetResource.all_through("products/1234", {})

        assert transport.calls == [
            ("GET", "/admin/products/1234/assets.json", {})
        ]
        assert assets == []
        assert assets.first() is None


class TestHydration:
    def test_fields_copied_verbatim(self):
        data = {"id": 1, "tags": ["a", "b"], "options": {"x": None}}

        product = Product.build_resource(data)

        assert product["tags"] == ["a", "b"]
        assert product["options"] == {"x": None}
        assert product.original_property("id") == 1

    def test_missing_field(self):
        product = Product.build_resource({"id": 1})
        assert product["unknown"] is MISSING
        assert not product.get("unknown")

    def test_is_new(self):
        assert Product().is_new()
        assert Product.build_resource({"title": "x"}).is_new()
        assert not Product.build_resource({"id": 1}).is_new()

    def test_populate_existing_instance(self):
        product = Product({"title": "local"})
        same = Product.build_resource({"id": 2}, instance=product)
        assert same is product
        assert product["id"] == 2

    def test_repr(self):
        assert repr(Product()) == "<Product: new>"
        assert repr(Product.build_resource({"id": 5})) == "<Product: id=5>"


class TestProperties:
    def test_mutation_shadows_persisted(self):
        product = Product.build_resource({"id": 1, "title": "old"})

        product["title"] = "new"

        assert product["title"] == "new"
        assert product.original_property("title") == "old"
        assert product.is_dirty

    def test_constructor_properties_are_unsaved(self):
        product = Product({"title": "Shirt"})
        assert product["title"] == "Shirt"
        assert product.original_property("title") is MISSING
        assert "title" in product

    def test_reset_properties(self):
        product = Product.build_resource({"id": 1, "title": "old"})
        product.set("title", "new")

        product.reset_properties()

        assert product["title"] == "old"
        assert not product.is_dirty

    def test_to_dict(self):
        product = Product.build_resource({"id": 1, "title": "old"})
        product["vendor"] = "ACME"
        assert product.to_dict() == {"id": 1, "title": "old", "vendor": "ACME"}


class TestSave:
    def test_create(self, transport):
        transport.queue({"product": {"id": 7, "title": "Server title"}})
        product = Product({"title": "Shirt"})

        product.save()

        assert transport.calls == [
            ("POST", "/admin/products.json", {"product": {"title": "Shirt"}})
        ]
        assert not product.is_new()
        assert product["title"] == "Server title"
        assert not product.is_dirty

    def test_update(self, transport):
        transport.queue({"product": {"id": 7, "title": "Echoed"}})
        product = Product.build_resource({"id": 7, "title": "Old"})
        product["title"] = "New"

        product.save()

        assert transport.calls == [
            ("PUT", "/admin/products/7.json", {"product": {"title": "New"}})
        ]
        assert product["title"] == "Echoed"
        assert product.original_property("title") == "Echoed"

    def test_properties_replaced_wholesale(self, transport):
        transport.queue({"product": {"id": 7}})
        product = Product.build_resource({"id": 7, "vendor": "ACME"})

        product.save()

        assert product["vendor"] is MISSING

    def test_nested_resources_sent_as_data(self, transport):
        transport.queue({"asset": {"id": 1}})
        asset = AssetResource({"parent": ThemeResource({"name": "Dawn"})})

        asset.save()

        assert transport.calls[0][2] == {
            "asset": {"parent": {"name": "Dawn"}}
        }

    def test_save_with_instance_connection(self, transport, make_transport):
        other = make_transport({"product": {"id": 1, "title": "t"}})
        product = Product.find(1, connection=other)
        other.queue({"product": {"id": 1, "title": "u"}})
        product["title"] = "u"

        product.save()

        assert len(other.calls) == 2
        assert transport.calls == []


class TestDestroy:
    def test_destroy(self, transport):
        transport.queue({})
        product = Product.build_resource({"id": 3, "title": "x"})

        assert product.destroy() is None
        assert transport.calls == [("DELETE", "/admin/products/3.json", {})]
        assert product["title"] == "x"


class TestRelationships:
    def test_declared_on_class(self):
        assert set(AssetResource.relationships) == {"theme", "themes"}
        assert AssetResource.theme.name == "theme"
        assert AssetResource.theme.resource is AssetResource
        assert AssetResource.theme.target is ThemeResource

    def test_relationships_read_only(self):
        with pytest.raises(TypeError):
            AssetResource.relationships["other"] = HasOne(ThemeResource)

    def test_string_target(self):
        assert ThemeResource.assets.target is AssetResource

    def test_inherited(self):
        class VersionedAsset(AssetResource):
            path = "versioned_assets"

        assert set(VersionedAsset.relationships) == {"theme", "themes"}
        assert VersionedAsset.theme.resource is VersionedAsset
        assert AssetResource.theme.resource is AssetResource

    def test_has_one(self, transport):
        transport.queue({"themes": [{"id": 1, "role": "main"}, {"id": 2}]})
        asset = AssetResource.build_resource({"id": 10})

        theme = asset.theme

        assert transport.calls == [
            ("GET", "/admin/themes.json", {"role": "main"})
        ]
        assert isinstance(theme, ThemeResource)
        assert theme["id"] == 1

    def test_has_one_memoized(self, transport):
        transport.queue({"themes": [{"id": 1}]})
        asset = AssetResource.build_resource({"id": 10})

        first = asset.get("theme")
        second = asset.get("theme")

        assert first is second
        assert len(transport.calls) == 1

    def test_has_one_empty(self, transport):
        transport.queue({"themes": []})
        asset = AssetResource.build_resource({"id": 10})
        assert asset.theme is None

    def test_has_many(self, transport):
        transport.queue({"themes": [{"id": 1}, {"id": 2}]})
        asset = AssetResource.build_resource({"id": 10})

        themes = asset["themes"]

        assert transport.calls == [("GET", "/admin/themes.json", {})]
        assert [t["id"] for t in themes] == [1, 2]
        assert asset["themes"] is themes
        assert len(transport.calls) == 1

    def test_includes_many_embedded(self, transport):
        theme = ThemeResource.build_resource(
            {"id": 1, "assets": [{"key": "a"}, {"key": "b"}]}
        )

        assets = theme.assets

        assert transport.calls == []
        assert isinstance(assets, ResourceCollection)
        assert all(isinstance(a, AssetResource) for a in assets)
        assert theme.assets is assets

    def test_includes_many_embedded_empty(self, transport):
        theme = ThemeResource.build_resource({"id": 1, "assets": []})
        assert theme.assets == []
        assert transport.calls == []

    def test_includes_many_fetched(self, transport):
        transport.queue({"assets": [{"key": "a"}]})
        theme = ThemeResource.build_resource({"id": 4})

        assets = theme.assets
        theme.assets

        assert transport.calls == [("GET", "/admin/themes/4/assets.json", {})]
        assert assets[0]["key"] == "a"

    def test_includes_one_embedded(self, transport):
        page = PageResource.build_resource({"id": 1, "theme": {"id": 2}})

        theme = page.theme

        assert transport.calls == []
        assert isinstance(theme, ThemeResource)
        assert theme["id"] == 2

    def test_includes_one_fetched_by_default_key(self, transport):
        transport.queue({"theme": {"id": 2}})
        page = PageResource.build_resource({"id": 1, "theme_id": 2})

        theme = page.theme

        assert transport.calls == [("GET", "/admin/themes/2.json", {})]
        assert theme["id"] == 2
        assert page.theme is theme

    def test_includes_one_fetched_by_custom_key(self, transport):
        transport.queue({"theme": {"id": 6}})
        page = PageResource.build_resource({"id": 1, "layout_theme_id": 6})

        assert page.layout["id"] == 6
        assert transport.calls == [("GET", "/admin/themes/6.json", {})]

    def test_includes_one_without_link(self, transport):
        page = PageResource.build_resource({"id": 1})
        assert page.theme is None
        assert transport.calls == []

    def test_params_evaluated_at_resolution(self, transport):
        role = {"value": "main"}

        class Snippet(Resource):
            path = "snippets"
            name = "snippet"
            name_plural = "snippets"

            theme = HasOne(
                ThemeResource, params=lambda: {"role": role["value"]}
            )

        role["value"] = "unpublished"
        transport.queue({"themes": [{"id": 3}]})

        Snippet.build_resource({"id": 1}).theme

        assert transport.calls == [
            ("GET", "/admin/themes.json", {"role": "unpublished"})
        ]

    def test_original_property_does_not_resolve(self, transport):
        page = PageResource.build_resource({"id": 1, "theme": {"id": 2}})

        assert page.original_property("theme") == {"id": 2}
        assert page.original_property("layout") is MISSING
        assert transport.calls == []

    def test_not_relational(self):
        page = PageResource.build_resource({"id": 1, "title": "x"})

        with pytest.raises(RelationalAccessError, match="title"):
            page.get_relationship("title")

    def test_resolved_relationship_cleared_by_save(self, transport):
        transport.queue({"themes": [{"id": 1}]})
        asset = AssetResource.build_resource({"id": 10})
        asset.theme
        transport.queue({"asset": {"id": 10}}, {"themes": [{"id": 2}]})

        asset.save()

        assert asset.theme["id"] == 2
        assert len(transport.calls) == 3

    def test_includes_many_on_unsaved_parent(self, transport):
        product = Product({"title": "new"})

        with pytest.raises(UnsavedResourceError):
            product.variants

        assert transport.calls == []

    def test_name_target_prefers_declaring_module(self, transport):
        class Variant(Resource):
            path = "my_variants"
            name = "variant"
            name_plural = "variants"

        transport.queue({"variants": [{"id": 11}]})
        product = Product.build_resource({"id": 1})

        variants = product.variants

        assert transport.calls == [
            ("GET", "/admin/products/1/variants.json", {})
        ]
        assert not isinstance(variants[0], Variant)

    def test_qualified_name_target(self, transport):
        class Listing(Resource):
            path = "listings"
            name = "listing"
            name_plural = "listings"

            variants = IncludesMany("shopify_resource.models.Variant")

        assert Listing.variants.target is Variant

    def test_unknown_name_target(self):
        class Listing(Resource):
            path = "listings"
            name = "listing"
            name_plural = "listings"

            things = HasMany("NoSuchResource")

        with pytest.raises(ConfigurationError, match="NoSuchResource"):
            Listing.things.target

    def test_inherited_target_resolved_in_declaring_module(self):
        class LocalProduct(Product):
            path = "local_products"

        assert LocalProduct.variants.target is Variant
