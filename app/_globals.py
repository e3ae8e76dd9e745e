#
# Copyright 2023 Full Duplex Media, LLC

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
import logging, os, json, re, types, secrets
import boto3, jinja2

_logger = logging.getLogger()
if os.environ.get('LOG_LEVEL') == 'DEBUG':
  _logger.setLevel(logging.DEBUG)
else:
  _logger.setLevel(logging.INFO)
  logging.disable(logging.DEBUG)

# Globals: configuration
Project = os.environ.get('Project', 'wildfire-demo-public')
BucketPrefix = os.environ.get('BucketPrefix', 'mapbox-')
Runtime = os.environ.get('Runtime', 'nodejs6.10')
StageName = os.environ.get('StageName', 'wildfires')
ScheduleExpression = os.environ.get('ScheduleExpression', 'rate(2 hours)')
AlarmEmail = os.environ.get('AlarmEmail', 'dclark@mapbox.com')
FormatVersion = '2010-09-09'
Description = 'Fetches data for a wildfire demo map'

# Globals: provided by CloudFormation macro invocation
Fragment = None

# Globals: computed
DeploymentName = None

# Globals: utilities
functions = {}
methods = []

# CloudFormation template response
_parameters = {}
_resources = {}
_outputs = {}
_sealed = False

_templates = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')

def init(event=None, token=None):
  global Fragment, DeploymentName, functions, methods
  global _parameters, _resources, _outputs, _sealed

  if event is not None:
    log(json.dumps(event), debug=True)

  Fragment = dict((event or {}).get('fragment') or {})

  # API Gateway only picks up method changes on a new deployment resource
  token = token or secrets.token_hex
  DeploymentName = f'Deployment{token(4)}'

  functions = {}
  methods = []

  _parameters = {}
  _resources = {}
  _outputs = {}
  _sealed = False

def parameter(name, description, default=None):
  global _parameters

  __check_sealed()

  param = dict(
    Type = 'String',
    Description = description
  )
  if default is not None:
    param['Default'] = default

  _parameters[name] = param

def resource(name, resource, overwrite=False):
  global _resources

  __check_sealed()

  if overwrite is not True and _resources.get(name):
    raise Exception(f'A resource with name:[{name}] already exists')

  _resources[name] = resource

def output(key, value, description=None):
  global _outputs

  __check_sealed()

  _outputs[key] = dict(
    Value = value
  )
  if description:
    _outputs[key]['Description'] = description

def template():
  global _sealed

  _sealed = True

  fragment = Fragment or {}
  log(f'Sealed template with {len(_resources)} resources ({DeploymentName})')

  return deepCopy(fragment | dict(
    AWSTemplateFormatVersion = FormatVersion,
    Description = Description,
    Parameters = fragment.get('Parameters', {}) | _parameters,
    Resources = fragment.get('Resources', {}) | _resources,
    Outputs = fragment.get('Outputs', {}) | _outputs
  ))

def validate(document):
  client = boto3.client('cloudformation')
  response = client.validate_template(
    TemplateBody = json.dumps(document)
  )

  log(json.dumps(response.get('Parameters', [])), debug=True)

  return response

def deepCopy(src):
  try:
    return json.loads(json.dumps(src))
  except TypeError:
    from copy import deepcopy
    return deepcopy(src)

def j2(templateFile, data=None):
  _template = jinja2.Environment(
    loader = jinja2.FileSystemLoader(searchpath=_templates)
  ).get_template(templateFile)

  _g = {}
  for var,val in globals().items():
    if re.match('_', var) or callable(val) or type(val) is types.ModuleType:
      continue
    _g[var] = val

  _context = {
    'Wildfire': _g,
    'data': data or {}
  }

  return _template.render(_context)

def log(message, debug=False, exception=False):
  if debug:
    _logger.debug(message)
  elif exception:
    _logger.exception(message)
  else:
    _logger.info(message)

def __check_sealed():
  if _sealed:
    raise Exception('Template has already been built, start a new build with init()')
