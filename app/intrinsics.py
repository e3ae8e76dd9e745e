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
"""
Symbolic reference tokens. CloudFormation resolves these at deploy time,
the builder only carries the target's logical name as data.
"""
import re

PseudoParameters = {
  'AWS::AccountId',
  'AWS::NotificationARNs',
  'AWS::NoValue',
  'AWS::Partition',
  'AWS::Region',
  'AWS::StackId',
  'AWS::StackName',
  'AWS::URLSuffix'
}

_placeholder = re.compile(r'\$\{([A-Za-z0-9:]+)(?:\.([A-Za-z0-9.]+))?\}')

class Ref(dict):
  def __init__(self, name):
    super().__init__(Ref = name)
    self.name = name

class GetAtt(dict):
  def __init__(self, name, attribute):
    super().__init__({'Fn::GetAtt': [name, attribute]})
    self.name = name
    self.attribute = attribute

def join(*parts):
  return {'Fn::Join': ['', list(parts)]}

def interpolate(text):
  """Turn ${Name} and ${Name.Attr} placeholders into a Fn::Join."""
  parts = []
  position = 0

  for match in _placeholder.finditer(text):
    if match.start() > position:
      parts.append(text[position:match.start()])

    name, attribute = match.groups()
    parts.append(GetAtt(name, attribute) if attribute else Ref(name))
    position = match.end()

  if not parts:
    return text

  if position < len(text):
    parts.append(text[position:])

  return join(*parts)

def references(node):
  if isinstance(node, dict):
    for key, value in node.items():
      if key == 'Ref' and isinstance(value, str):
        yield value

      elif key == 'Fn::GetAtt':
        if isinstance(value, str):
          yield value.split('.', 1)[0]
        else:
          yield value[0]

      elif key == 'DependsOn':
        if isinstance(value, str):
          yield value
        else:
          yield from value

      else:
        yield from references(value)

  elif isinstance(node, list):
    for item in node:
      yield from references(item)

def lint(document):
  known = set(PseudoParameters)
  known.update(document.get('Parameters', {}))
  known.update(document.get('Resources', {}))

  unresolved = set()
  for section in ['Resources', 'Outputs']:
    for name in references(document.get(section, {})):
      if name not in known:
        unresolved.add(name)

  return sorted(unresolved)
