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
import _globals as Wildfire
import parameters, functions, monitoring, gateway

def build(event=None, token=None):
  Wildfire.init(event, token)

  parameters.make()
  functions.make()
  monitoring.make()
  gateway.make()

  return Wildfire.template()

"""
event:
  region: "$REGION",
  accountId: "$ACCOUNT_ID",
  fragment: { ... },
  transformId: "$TRANSFORM_ID",
  params: { ... },
  requestId: "$REQUEST_ID",
  templateParameterValues: { ... }

response:
  requestId: "$REQUEST_ID",
  status: "$STATUS",
  fragment: { ... },
  [
    errorMessage: "$ERROR_MESSAGE"
  ]
"""
def handler(event, context):
  try:
    response = {
      "requestId" : event['requestId'],
      "status" : "success",
      "fragment" : build(event)
    }

  except Exception as e:
    Wildfire.log(e, exception=True)
    response = {
      "requestId" : event['requestId'],
      "status" : "error",
      "errorMessage" : str(e)
    }

  return response
