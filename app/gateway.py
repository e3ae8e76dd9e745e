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
import functions
from intrinsics import Ref, GetAtt, join, interpolate

CorsHeaders = {
  'Access-Control-Allow-Headers': "'*'",
  'Access-Control-Allow-Methods': "'GET,OPTIONS'",
  'Access-Control-Allow-Origin': "'*'"
}

def make():
  make_apigateway_RestApi()

  make_proxy(dict(
    Label = 'Perimeter',
    PathPart = 'perimeter',
    Function = Wildfire.functions['Perimeter'],
    RequestTemplate = 'perimeter-request.json.j2'
  ))

  make_proxy(dict(
    Label = 'Articles',
    PathPart = 'articles',
    Function = Wildfire.functions['Articles'],
    RequestTemplate = 'articles-request.json.j2'
  ))

  make_apigateway_Deployment()
  make_apigateway_Stage()

  Wildfire.output('ProxyUrl', join(
    'https://',
    Ref('ProxyApi'),
    '.execute-api.',
    Ref('AWS::Region'),
    f'.amazonaws.com/{Wildfire.StageName}'
  ))

def make_apigateway_RestApi():
  Wildfire.resource('ProxyApi', dict(
    Type = 'AWS::ApiGateway::RestApi',
    Properties = dict(
      Name = join(Ref('AWS::StackName'), '-datasets-proxy')
    )
  ))

def make_proxy(proxy):
  resourceName = f'Proxy{proxy["Label"]}Resource'
  make_apigateway_Resource(
    resourceName,
    GetAtt('ProxyApi', 'RootResourceId'),
    proxy['PathPart']
  )

  proxy['ResourceName'] = f'Proxy{proxy["Label"]}IdResource'
  make_apigateway_Resource(proxy['ResourceName'], Ref(resourceName), '{id}')

  make_apigateway_OptionsMethod(proxy)
  make_apigateway_GetMethod(proxy)

  functionName = proxy['Function']
  functions.make_lambda_Permission(
    functionName.replace('Function', 'Permission'),
    dict(
      FunctionName = functionName,
      Principal = 'apigateway.amazonaws.com',
      SourceArn = join(
        'arn:aws:execute-api:',
        Ref('AWS::Region'),
        ':',
        Ref('AWS::AccountId'),
        ':',
        Ref('ProxyApi'),
        '/*'
      )
    )
  )

def make_apigateway_Resource(resourceName, parent, pathPart):
  Wildfire.resource(resourceName, dict(
    Type = 'AWS::ApiGateway::Resource',
    Properties = dict(
      ParentId = parent,
      RestApiId = Ref('ProxyApi'),
      PathPart = pathPart
    )
  ))

def make_apigateway_OptionsMethod(proxy):
  resourceName = f'Proxy{proxy["Label"]}OptionsMethod'

  make_apigateway_Method(resourceName, proxy, dict(
    HttpMethod = 'OPTIONS',
    MethodResponses = [
      dict(
        StatusCode = 200,
        ResponseModels = {'application/json': 'Empty'},
        ResponseParameters = {
          f'method.response.header.{header}': True for header in CorsHeaders
        }
      )
    ],
    Integration = dict(
      Type = 'MOCK',
      IntegrationResponses = [
        dict(
          StatusCode = 200,
          ResponseParameters = {
            f'method.response.header.{header}': value
            for header, value in CorsHeaders.items()
          }
        )
      ]
    )
  ))

def make_apigateway_GetMethod(proxy):
  resourceName = f'Proxy{proxy["Label"]}GetMethod'
  allowOrigin = 'method.response.header.Access-Control-Allow-Origin'

  requestTemplate = Wildfire.j2(proxy['RequestTemplate'], dict(param = 'id'))

  make_apigateway_Method(resourceName, proxy, dict(
    HttpMethod = 'GET',
    MethodResponses = [
      dict(
        StatusCode = 200,
        ResponseModels = {'application/json': 'Empty'},
        ResponseParameters = {allowOrigin: True}
      ),
      dict(
        StatusCode = 500,
        ResponseModels = {'application/json': 'Empty'}
      )
    ],
    Integration = dict(
      Type = 'AWS',
      IntegrationHttpMethod = 'POST',
      RequestTemplates = {
        'application/json': interpolate(requestTemplate)
      },
      IntegrationResponses = [
        dict(
          StatusCode = 200,
          ResponseParameters = {allowOrigin: CorsHeaders['Access-Control-Allow-Origin']}
        ),
        dict(
          StatusCode = 500,
          SelectionPattern = 'error'
        )
      ],
      Uri = join(
        'arn:aws:apigateway:',
        Ref('AWS::Region'),
        ':lambda:path/2015-03-31/functions/',
        GetAtt(proxy['Function'], 'Arn'),
        '/invocations'
      )
    )
  ))

def make_apigateway_Method(resourceName, proxy, method):
  Wildfire.resource(resourceName, dict(
    Type = 'AWS::ApiGateway::Method',
    Properties = dict(
      RestApiId = Ref('ProxyApi'),
      ResourceId = Ref(proxy['ResourceName']),
      AuthorizationType = 'None'
    ) | method
  ))

  Wildfire.methods.append(resourceName)

def make_apigateway_Deployment():
  # routing changes go live only after every method exists
  Wildfire.resource(Wildfire.DeploymentName, dict(
    Type = 'AWS::ApiGateway::Deployment',
    DependsOn = list(Wildfire.methods),
    Properties = dict(
      RestApiId = Ref('ProxyApi'),
      StageName = 'unused'
    )
  ))

def make_apigateway_Stage():
  Wildfire.resource('ProxyStage', dict(
    Type = 'AWS::ApiGateway::Stage',
    Properties = dict(
      DeploymentId = Ref(Wildfire.DeploymentName),
      StageName = Wildfire.StageName,
      Description = 'Api Stage',
      RestApiId = Ref('ProxyApi'),
      MethodSettings = [
        dict(
          HttpMethod = '*',
          ResourcePath = '/*',
          ThrottlingBurstLimit = 20,
          ThrottlingRateLimit = 5
        )
      ]
    )
  ))
