from unittest import mock

import pytest

import _globals as Wildfire


@pytest.fixture(autouse=True)
def fresh_build():
  Wildfire.init(token=lambda n: "00" * n)
  yield


class TestRegistries:
  def test_deployment_name(self):
    assert Wildfire.DeploymentName == "Deployment00000000"

  def test_duplicate_resource_raises(self):
    Wildfire.resource("Topic", dict(Type = "AWS::SNS::Topic"))
    with pytest.raises(Exception, match=r"name:\[Topic\] already exists"):
      Wildfire.resource("Topic", dict(Type = "AWS::SNS::Topic"))

  def test_overwrite_replaces(self):
    Wildfire.resource("Topic", dict(Type = "AWS::SNS::Topic"))
    Wildfire.resource("Topic", dict(Type = "AWS::SQS::Queue"), overwrite=True)
    assert Wildfire.template()["Resources"]["Topic"]["Type"] == "AWS::SQS::Queue"

  def test_parameter_default_only_when_given(self):
    Wildfire.parameter("GitSha", "The SHA")
    Wildfire.parameter("AlarmEmail", "where", default="ops@example.com")
    params = Wildfire.template()["Parameters"]
    assert params["GitSha"] == {"Type": "String", "Description": "The SHA"}
    assert params["AlarmEmail"]["Default"] == "ops@example.com"

  def test_sealed_after_template(self):
    Wildfire.template()
    with pytest.raises(Exception, match="already been built"):
      Wildfire.resource("Late", dict(Type = "AWS::SNS::Topic"))
    with pytest.raises(Exception, match="already been built"):
      Wildfire.output("Late", "value")

  def test_returned_document_is_detached(self):
    Wildfire.resource("Topic", dict(Type = "AWS::SNS::Topic"))
    document = Wildfire.template()
    document["Resources"].clear()
    assert Wildfire._resources["Topic"] == dict(Type = "AWS::SNS::Topic")

  def test_init_resets(self):
    Wildfire.resource("Topic", dict(Type = "AWS::SNS::Topic"))
    Wildfire.template()
    Wildfire.init(token=lambda n: "11" * n)
    Wildfire.resource("Topic", dict(Type = "AWS::SNS::Topic"))
    assert Wildfire.DeploymentName == "Deployment11111111"

  def test_fragment_is_merged(self):
    Wildfire.init(
      dict(fragment = dict(
        Transform = "WildfireDemo",
        Resources = dict(Extra = dict(Type = "AWS::SNS::Topic"))
      )),
      token=lambda n: "00" * n
    )
    Wildfire.resource("Topic", dict(Type = "AWS::SNS::Topic"))
    document = Wildfire.template()
    assert document["Transform"] == "WildfireDemo"
    assert set(document["Resources"]) == {"Extra", "Topic"}


class TestHelpers:
  def test_j2_renders_request_template(self):
    rendered = Wildfire.j2("articles-request.json.j2", dict(param = "id"))
    assert rendered == "{\"inciwebid\":\"$input.params('id')\"}"

  def test_validate_sends_template_body(self):
    client = mock.Mock()
    client.validate_template.return_value = {"Parameters": []}

    with mock.patch.object(Wildfire.boto3, "client", return_value=client) as factory:
      response = Wildfire.validate({"Resources": {}})

    factory.assert_called_once_with("cloudformation")
    client.validate_template.assert_called_once_with(
      TemplateBody = '{"Resources": {}}'
    )
    assert response == {"Parameters": []}
