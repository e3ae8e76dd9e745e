import json

from intrinsics import GetAtt, Ref, interpolate, join, lint, references


class TestTokens:
  def test_ref_serializes_and_keeps_name(self):
    ref = Ref("ProxyApi")
    assert ref.name == "ProxyApi"
    assert json.loads(json.dumps(ref)) == {"Ref": "ProxyApi"}

  def test_getatt_serializes_and_keeps_target(self):
    att = GetAtt("UpdateFunction", "Arn")
    assert (att.name, att.attribute) == ("UpdateFunction", "Arn")
    assert att == {"Fn::GetAtt": ["UpdateFunction", "Arn"]}

  def test_join(self):
    assert join("a", Ref("b")) == {"Fn::Join": ["", ["a", {"Ref": "b"}]]}


class TestInterpolate:
  def test_plain_text_unchanged(self):
    text = "{\"inciwebid\":\"$input.params('id')\"}"
    assert interpolate(text) == text

  def test_placeholders_become_tokens(self):
    assert interpolate("arn:${AWS::Region}:${Api}/*") == join(
      "arn:", Ref("AWS::Region"), ":", Ref("Api"), "/*"
    )

  def test_attribute_placeholder(self):
    assert interpolate("${UpdateFunction.Arn}") == join(
      GetAtt("UpdateFunction", "Arn")
    )


class TestLint:
  def test_references_every_form(self):
    node = {
      "A": {"Ref": "One"},
      "B": [{"Fn::GetAtt": ["Two", "Arn"]}, {"Fn::GetAtt": "Three.Arn"}],
      "C": {"DependsOn": ["Four"], "Other": {"DependsOn": "Five"}},
    }
    assert sorted(references(node)) == ["Five", "Four", "One", "Three", "Two"]

  def test_pseudo_parameters_and_parameters_resolve(self):
    document = {
      "Parameters": {"GitSha": {}},
      "Resources": {
        "Fn": {"Properties": {"Key": join(Ref("GitSha"), Ref("AWS::Region"))}}
      },
      "Outputs": {"Url": {"Value": Ref("AWS::StackName")}},
    }
    assert lint(document) == []

  def test_unresolved_names_reported(self):
    document = {
      "Resources": {"Rule": {"DependsOn": ["Missing"], "Properties": {}}},
      "Outputs": {"Url": {"Value": GetAtt("Gone", "Arn")}},
    }
    assert lint(document) == ["Gone", "Missing"]
