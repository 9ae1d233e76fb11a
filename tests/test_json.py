from typing import List, Optional

import msgspec
import pytest
import shapely

import geomspec
from geomspec import (
    BoundingBoxPolicy,
    GeoJSONConfig,
    GeometryCodec,
    GeometryFactory,
    InvalidConfiguration,
    UnsupportedGeometry,
)
from geomspec.features import Feature, FeatureCollection, GeoJSON


class Shapes(msgspec.Struct):
    point: Optional[shapely.Point] = None
    polygon: Optional[shapely.Polygon] = None
    multi_polygon: Optional[shapely.MultiPolygon] = None


def test_module_dir():
    assert set(dir(geomspec.json)) == {"Encoder", "Decoder", "encode", "decode"}
    assert set(dir(geomspec.features)) == {"Feature", "FeatureCollection", "GeoJSON"}


class TestConfig:
    def test_defaults(self):
        config = GeoJSONConfig()
        assert config.geometry_factory == GeometryFactory(4326)
        assert config.bounding_box == BoundingBoxPolicy.never()
        assert config.decimal_places == 8
        assert config.max_depth is None

    def test_keyword_only(self):
        with pytest.raises(TypeError):
            GeoJSONConfig(GeometryFactory())

    def test_frozen(self):
        config = GeoJSONConfig()
        with pytest.raises(AttributeError):
            config.decimal_places = 2

    def test_negative_decimal_places(self):
        with pytest.raises(InvalidConfiguration, match="decimal_places"):
            GeoJSONConfig(decimal_places=-1)

    def test_invalid_factory(self):
        with pytest.raises(InvalidConfiguration, match="geometry_factory"):
            GeoJSONConfig(geometry_factory=4326)

    def test_invalid_bounding_box(self):
        with pytest.raises(InvalidConfiguration, match="bounding_box"):
            GeoJSONConfig(bounding_box=True)

    def test_invalid_max_depth(self):
        with pytest.raises(InvalidConfiguration, match="max_depth"):
            GeometryCodec(GeoJSONConfig(max_depth=-1))


class TestGeometryCodec:
    def test_components_configured(self):
        config = GeoJSONConfig(
            geometry_factory=GeometryFactory(3857),
            bounding_box=BoundingBoxPolicy.always(),
            decimal_places=3,
            max_depth=2,
        )
        codec = GeometryCodec(config)
        assert codec.config is config
        assert codec.encoder.bounding_box == BoundingBoxPolicy.always()
        assert codec.encoder.decimal_places == 3
        assert codec.decoder.geometry_factory == GeometryFactory(3857)
        assert codec.decoder.max_depth == 2

    def test_encode_decode(self):
        codec = GeometryCodec()
        obj = codec.encode(shapely.Point(1, 2))
        assert obj == {"type": "Point", "coordinates": [1, 2]}
        res = codec.decode(obj)
        assert isinstance(res, shapely.Point)
        assert codec.decode(None) is None

    def test_decode_typed(self):
        codec = GeometryCodec()
        with pytest.raises(geomspec.TypeMismatch):
            codec.decode({"type": "Point", "coordinates": [0, 0]}, shapely.Polygon)

    def test_enc_hook_unsupported(self):
        with pytest.raises(TypeError, match="Encoding objects of type object is unsupported"):
            GeometryCodec().enc_hook(object())

    def test_dec_hook_unsupported(self):
        with pytest.raises(TypeError, match="is unsupported"):
            GeometryCodec().dec_hook(complex, [1, 2])

    def test_hooks_with_msgspec(self):
        codec = GeometryCodec(GeoJSONConfig(decimal_places=2))
        msg = msgspec.json.encode(shapely.Point(1.2345, 2), enc_hook=codec.enc_hook)
        assert msg == b'{"type":"Point","coordinates":[1.23,2]}'
        res = msgspec.json.decode(msg, type=shapely.Point, dec_hook=codec.dec_hook)
        assert (res.x, res.y) == (1.23, 2.0)

    def test_to_builtins_and_convert(self):
        codec = GeometryCodec()
        obj = msgspec.to_builtins(
            Shapes(point=shapely.Point(1, 2)), enc_hook=codec.enc_hook
        )
        assert obj == {
            "point": {"type": "Point", "coordinates": [1, 2]},
            "polygon": None,
            "multi_polygon": None,
        }
        res = msgspec.convert(obj, Shapes, dec_hook=codec.dec_hook)
        assert isinstance(res.point, shapely.Point)

    def test_chained_hooks(self):
        codec = GeometryCodec()

        def enc_hook(obj):
            if isinstance(obj, complex):
                return [obj.real, obj.imag]
            raise TypeError

        def dec_hook(typ, obj):
            if typ is complex:
                return complex(*obj)
            raise TypeError

        class Ex(msgspec.Struct):
            c: complex
            p: shapely.Point

        msg = msgspec.json.encode(
            Ex(1 + 2j, shapely.Point(3, 4)), enc_hook=codec.chain_enc_hook(enc_hook)
        )
        assert msg == b'{"c":[1.0,2.0],"p":{"type":"Point","coordinates":[3,4]}}'
        res = msgspec.json.decode(
            msg, type=Ex, dec_hook=codec.chain_dec_hook(dec_hook)
        )
        assert res.c == 1 + 2j
        assert isinstance(res.p, shapely.Point)

    def test_chain_none_returns_plain_hooks(self):
        codec = GeometryCodec()
        assert codec.chain_enc_hook(None) == codec.enc_hook
        assert codec.chain_dec_hook(None) == codec.dec_hook


class TestJSON:
    def test_encode_geometry(self):
        assert geomspec.json.encode(shapely.Point(1, 2)) == (
            b'{"type":"Point","coordinates":[1,2]}'
        )

    def test_encode_precision(self):
        config = GeoJSONConfig(decimal_places=2)
        msg = geomspec.json.encode(shapely.Point(1.123456789, 2.0), config=config)
        assert msg == b'{"type":"Point","coordinates":[1.12,2]}'

    def test_encode_precision_zero(self):
        config = GeoJSONConfig(decimal_places=0)
        msg = geomspec.json.encode(shapely.Point(1.123456789, 2.0), config=config)
        assert msg == b'{"type":"Point","coordinates":[1,2]}'

    def test_encode_bbox(self):
        config = GeoJSONConfig(bounding_box=BoundingBoxPolicy.always(), decimal_places=1)
        msg = geomspec.json.encode(
            shapely.LineString([(0, 0), (1.25, 2)]), config=config
        )
        assert msg == (
            b'{"type":"LineString","bbox":[0.0,0.0,1.25,2.0],'
            b'"coordinates":[[0,0],[1.3,2]]}'
        )

    def test_encode_none(self):
        assert geomspec.json.encode(None) == b"null"
        assert geomspec.json.encode(Shapes()) == (
            b'{"point":null,"polygon":null,"multi_polygon":null}'
        )

    def test_encode_unsupported(self):
        class Oops:
            pass

        with pytest.raises(TypeError, match="Encoding objects of type Oops is unsupported"):
            geomspec.json.encode(Oops())

    def test_encoder(self):
        enc = geomspec.json.Encoder(config=GeoJSONConfig(decimal_places=1))
        assert enc.encode([shapely.Point(0.25, 1)]) == (
            b'[{"type":"Point","coordinates":[0.3,1]}]'
        )
        buf = bytearray()
        enc.encode_into(shapely.Point(1, 1), buf)
        assert bytes(buf) == b'{"type":"Point","coordinates":[1,1]}'

    def test_decode_geometry(self):
        res = geomspec.json.decode(b'{"type":"Point","coordinates":[1,2]}')
        assert isinstance(res, shapely.Point)
        assert shapely.get_srid(res) == 4326

    def test_decode_custom_factory(self):
        config = GeoJSONConfig(geometry_factory=GeometryFactory(3857))
        res = geomspec.json.decode(
            b'{"type":"Point","coordinates":[1,2]}', config=config
        )
        assert shapely.get_srid(res) == 3857

    def test_decode_null(self):
        assert geomspec.json.decode(b"null", type=Optional[shapely.Point]) is None

    def test_decoder(self):
        dec = geomspec.json.Decoder(List[shapely.Geometry])
        res = dec.decode(
            b'[{"type":"Point","coordinates":[1,2]},'
            b'{"type":"LineString","coordinates":[[0,0],[1,1]]}]'
        )
        assert [type(g) for g in res] == [shapely.Point, shapely.LineString]

    def test_decode_struct(self):
        res = geomspec.json.decode(
            b'{"point":{"type":"Point","coordinates":[1,2]},'
            b'"polygon":{"type":"Polygon","coordinates":[[[0,0],[1,0],[1,1],[0,0]]]}}',
            type=Shapes,
        )
        assert isinstance(res.point, shapely.Point)
        assert isinstance(res.polygon, shapely.Polygon)
        assert res.multi_polygon is None

    def test_decode_invalid_coordinates(self):
        msg = (
            b'{"multi_polygon":{"type":"MultiPolygon","coordinates":"[[['
            b"[102.01234567890,2.01234567890],"
            b"[103.01234567890,2.01234567890],"
            b"[103.01234567890,3.01234567890],"
            b"[102.01234567890,3.01234567890],"
            b'[102.01234567890,2.01234567890]]]]"}}'
        )
        with pytest.raises(msgspec.ValidationError) as rec:
            geomspec.json.decode(msg, type=Shapes)
        assert str(rec.value).startswith(
            "Invalid coordinates, expecting an array but got: STRING"
        )
        assert str(rec.value).endswith("`$.multi_polygon`")

    def test_decode_invalid_coordinate_elements(self):
        msg = b'{"point":{"type":"Point","coordinates":[[1,2],[3,4]]}}'
        with pytest.raises(msgspec.ValidationError) as rec:
            geomspec.json.decode(msg, type=Shapes)
        assert str(rec.value).startswith(
            "Invalid coordinates, expecting numbers but got: ARRAY"
        )

    def test_decode_unknown_type(self):
        with pytest.raises(msgspec.ValidationError, match="Invalid geometry type: Blob"):
            geomspec.json.decode(b'{"type":"Blob","coordinates":[]}')

    def test_decode_type_mismatch(self):
        msg = b'{"polygon":{"type":"Point","coordinates":[0,0]}}'
        with pytest.raises(msgspec.ValidationError) as rec:
            geomspec.json.decode(msg, type=Shapes)
        assert str(rec.value).startswith("Invalid type for Polygon: Point")

    def test_decode_max_depth(self):
        msg = (
            b'{"type":"GeometryCollection","geometries":'
            b'[{"type":"GeometryCollection","geometries":[]}]}'
        )
        config = GeoJSONConfig(max_depth=1)
        with pytest.raises(msgspec.ValidationError, match="maximum depth of 1"):
            geomspec.json.Decoder(config=config).decode(msg)

    def test_decode_malformed_json(self):
        with pytest.raises(msgspec.DecodeError):
            geomspec.json.decode(b'{"type":"Point",')

    def test_roundtrip(self):
        config = GeoJSONConfig(bounding_box=BoundingBoxPolicy.except_points())
        geom = shapely.GeometryCollection(
            [
                shapely.Point(1, 2, 3),
                shapely.Polygon([(0, 0), (1, 0), (1, 1), (0, 0)]),
                shapely.GeometryCollection(),
            ]
        )
        msg = geomspec.json.encode(geom, config=config)
        res = geomspec.json.decode(msg, config=config)
        assert res.wkt == geom.wkt


class TestFeatures:
    def test_encode_feature(self):
        feature = Feature(shapely.Point(1, 2), {"name": "a"}, id=1)
        assert geomspec.json.encode(feature) == (
            b'{"type":"Feature","geometry":{"type":"Point","coordinates":[1,2]},'
            b'"properties":{"name":"a"},"id":1}'
        )

    def test_encode_feature_without_id(self):
        feature = Feature(shapely.Point(1, 2))
        assert feature.id is msgspec.UNSET
        assert geomspec.json.encode(feature) == (
            b'{"type":"Feature","geometry":{"type":"Point","coordinates":[1,2]},'
            b'"properties":null}'
        )

    def test_decode_feature_without_id(self):
        res = geomspec.json.decode(
            b'{"type":"Feature","geometry":null,"properties":null}', type=Feature
        )
        assert res.id is msgspec.UNSET
        assert res.geometry is None

    def test_feature_collection_roundtrip(self):
        fc = FeatureCollection(
            [
                Feature(shapely.LineString([(0, 0), (1, 1)]), {"n": 1}, id="x"),
                Feature(None, None),
            ]
        )
        msg = geomspec.json.encode(fc)
        res = geomspec.json.decode(msg, type=FeatureCollection)
        assert len(res.features) == 2
        assert isinstance(res.features[0].geometry, shapely.LineString)
        assert res.features[0].properties == {"n": 1}
        assert res.features[0].id == "x"
        assert res.features[1].geometry is None

    def test_decode_union(self):
        dec = geomspec.json.Decoder(GeoJSON)
        res = dec.decode(
            b'{"type":"Feature","geometry":{"type":"Point","coordinates":[1,2]},'
            b'"properties":{}}'
        )
        assert isinstance(res, Feature)
        assert isinstance(res.geometry, shapely.Point)
        res = dec.decode(b'{"type":"FeatureCollection","features":[]}')
        assert res == FeatureCollection([])

    def test_invalid_geometry_path(self):
        msg = (
            b'{"type":"FeatureCollection","features":[{"type":"Feature",'
            b'"geometry":{"type":"Point","coordinates":"x"},"properties":null}]}'
        )
        with pytest.raises(msgspec.ValidationError) as rec:
            geomspec.json.decode(msg, type=FeatureCollection)
        assert str(rec.value) == (
            "Invalid coordinates, expecting an array but got: STRING"
            " - at `$.features[0].geometry`"
        )
