"""Tests for encoding and walking decoded types."""

import json

import pytest

from protodef.schema import resolve
from protodef.schema.types import (
    Container,
    Mapper,
    Named,
    Numeric,
    NumericFamily,
    Primitive,
    Protocol,
    Switch,
    to_protodef,
    walk,
)

CANONICAL = [
    "lu16",
    "void",
    "slot",
    ["container", [{"name": "serverPort", "type": "u16"}, {"anon": True, "type": "bool"}]],
    ["array", {"countType": "varint", "type": "cstring"}],
    ["array", {"count": "otherField", "type": "i8"}],
    ["array", {"count": 4, "type": ["option", "u8"]}],
    ["count", {"type": "varint", "countFor": "items"}],
    ["switch", {"name": "params", "compareTo": "name", "fields": {"a": "u8"}, "default": "void"}],
    ["option", "optionalNbt"],
    ["buffer", {"countType": "varint", "rest": False}],
    ["mapper", {"type": "varint", "mappings": {"0x00": "handshake"}}],
    ["bitfield", [{"name": "x", "size": 26, "signed": True}]],
    ["pstring", {"countType": "varint"}],
    ["particleData", {"compareTo": "particleId"}],
    ["entityMetadataLoop", {"endVal": 255, "type": "u8"}],
]


def describe_to_protodef():
    @pytest.mark.parametrize("value", CANONICAL, ids=lambda v: json.dumps(v)[:40])
    def encodes_canonical_form(expect, value):
        expect(to_protodef(resolve(value))) == value

    def keeps_empty_switch_fields(expect):
        switch = resolve(["switch", {"compareTo": "x", "fields": {}}])
        expect(to_protodef(switch)) == ["switch", {"compareTo": "x", "fields": {}}]


def describe_walk():
    def visits_nested_types_in_order(expect):
        node = resolve(
            [
                "container",
                [
                    {"name": "count", "type": "varint"},
                    {"name": "items", "type": ["array", {"countType": "u8", "type": "slot"}]},
                ],
            ]
        )
        visited = [(path, n) for path, n in walk(node)]
        expect([path for path, _ in visited]) == [
            (),
            ("count",),
            ("items",),
            ("items", "countType"),
            ("items", "type"),
        ]
        expect(visited[-1][1]) == Named("slot")

    def visits_switch_cases_and_default(expect):
        node = resolve(["switch", {"compareTo": "x", "fields": {"1": "u8"}, "default": "void"}])
        expect([path for path, _ in walk(node)]) == [(), ("1",), ("default",)]

    def yields_leaf_alone(expect):
        expect(list(walk(Primitive.VOID))) == [((), Primitive.VOID)]


def describe_to_dict():
    def serializes_tree(expect):
        node = resolve(["container", [{"name": "port", "type": "lu16"}, {"name": "ok", "type": "bool"}]])
        data = json.loads(node.to_json())
        expect(data["fields"][0]["name"]) == "port"
        expect(data["fields"][0]["type"]) == {
            "family": "short",
            "signed": False,
            "byte_order": "little_endian",
        }
        expect(data["fields"][1]["type"]) == "bool"

    def exposes_dataclass_fields(expect):
        container = Container(())
        expect(container.to_dict()) == {"fields": []}
        expect(Numeric(NumericFamily.VARINT).to_dict()["family"]) == NumericFamily.VARINT


def describe_immutability():
    def rejects_switch_case_assignment(expect):
        switch = resolve(["switch", {"compareTo": "x", "fields": {"1": "u8"}}])
        with pytest.raises(TypeError):
            switch.fields["2"] = Primitive.VOID
        expect(list(switch.fields)) == ["1"]

    def copies_mappings_on_construction(expect):
        cases = {"1": Primitive.VOID}
        switch = Switch(name=None, compare_to="x", fields=cases)
        cases["2"] = Primitive.BOOLEAN
        expect(dict(switch.fields)) == {"1": Primitive.VOID}

    def rejects_mapper_assignment(expect):
        mapper = Mapper("varint", {"0": "handshake"})
        with pytest.raises(TypeError):
            mapper.mappings["1"] = "status"

    def rejects_protocol_assignment(expect):
        protocol = Protocol(types={"u8": Named("native")})
        with pytest.raises(TypeError):
            protocol.types["varint"] = Named("native")
        with pytest.raises(TypeError):
            protocol.namespaces["play"] = Named("native")

    @pytest.mark.parametrize(
        "node",
        [
            Switch(name=None, compare_to="x", fields={}),
            Mapper("varint", {}),
            Protocol(types={}),
        ],
        ids=["switch", "mapper", "protocol"],
    )
    def mapping_nodes_are_unhashable(expect, node):
        with pytest.raises(TypeError):
            hash(node)

    def other_nodes_stay_hashable(expect):
        expect(hash(Named("slot"))) == hash(Named("slot"))

    def still_serializes_mappings(expect):
        mapper = Mapper("varint", {"0": "handshake"})
        expect(mapper.to_dict()["mappings"]) == {"0": "handshake"}
        expect(json.loads(mapper.to_json())["mappings"]) == {"0": "handshake"}
