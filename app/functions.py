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
from intrinsics import Ref, GetAtt, join

def make():
  make_iam_UpdateRole()
  make_iam_ProxyRole()

  make_lambda_Function(dict(
    Label = 'Update',
    ResourceName = 'UpdateFunction',
    Role = 'IamRole',
    Description = 'Update wildfire data',
    Handler = 'index.update',
    MemorySize = 1000,
    Environment = [
      'ownerId',
      'mapboxAccessToken',
      'pointsDatasetId',
      'pointsTilesetName',
      'maxPerimetersDatasetId',
      'maxPerimetersTilesetName',
      'perimeterDatasetNamePrefix'
    ]
  ))

  make_lambda_Function(dict(
    Label = 'Perimeter',
    ResourceName = 'PerimeterProxyFunction',
    Role = 'ProxyRole',
    Description = 'Read wildfire perimeters from Datasets API',
    Handler = 'index.perimeterProxy'
  ))

  # logical id matches the deployed stack
  make_lambda_Function(dict(
    Label = 'Articles',
    ResourceName = 'AriclesProxyFunction',
    Role = 'ProxyRole',
    Description = 'Read wildfire articles from Inciweb RSS feeds',
    Handler = 'index.articlesProxy'
  ))

  make_events_ScheduledRule(Wildfire.functions['Update'])

def make_iam_UpdateRole():
  Wildfire.resource('IamRole', dict(
    Type = 'AWS::IAM::Role',
    Properties = dict(
      AssumeRolePolicyDocument = dict(
        Statement = [
          dict(
            Effect = 'Allow',
            Principal = dict(Service = 'lambda.amazonaws.com'),
            Action = ['sts:AssumeRole']
          )
        ]
      ),
      Policies = [
        dict(
          PolicyName = 'do-what-is-necessary',
          PolicyDocument = dict(
            Statement = [
              dict(
                Effect = 'Allow',
                Action = ['logs:*'],
                Resource = 'arn:aws:logs:*:*:*'
              ),
              dict(
                Effect = 'Allow',
                Action = ['apigateway:*'],
                Resource = 'arn:aws:apigateway:*::/*'
              )
            ]
          )
        )
      ]
    )
  ))

def make_iam_ProxyRole():
  Wildfire.resource('ProxyRole', dict(
    Type = 'AWS::IAM::Role',
    Properties = dict(
      AssumeRolePolicyDocument = dict(
        Statement = [
          dict(
            Sid = 'proxyrole',
            Effect = 'Allow',
            Principal = dict(Service = 'lambda.amazonaws.com'),
            Action = 'sts:AssumeRole'
          )
        ]
      ),
      Policies = [
        dict(
          PolicyName = 'WriteLogs',
          PolicyDocument = dict(
            Statement = [
              dict(
                Effect = 'Allow',
                Action = ['logs:*'],
                Resource = ['arn:aws:logs:*:*:*']
              )
            ]
          )
        )
      ]
    )
  ))

def make_lambda_Function(function):
  resourceName = function['ResourceName']

  resource = dict(
    Type = 'AWS::Lambda::Function',
    Properties = dict(
      Role = GetAtt(function['Role'], 'Arn'),
      Code = dict(
        S3Bucket = join(Wildfire.BucketPrefix, Ref('AWS::Region')),
        S3Key = join(f'bundles/{Wildfire.Project}/', Ref('GitSha'), '.zip')
      ),
      Description = function['Description'],
      Handler = function['Handler'],
      MemorySize = function.get('MemorySize', 512),
      Runtime = Wildfire.Runtime,
      Timeout = function.get('Timeout', 300)
    )
  )

  if function.get('Environment'):
    resource['Properties']['Environment'] = dict(
      Variables = {name: Ref(name) for name in function['Environment']}
    )

  Wildfire.resource(resourceName, resource)
  Wildfire.functions[function['Label']] = resourceName

def make_events_ScheduledRule(functionName):
  Wildfire.resource('ScheduledRule', dict(
    Type = 'AWS::Events::Rule',
    Properties = dict(
      Description = 'ScheduledRule',
      ScheduleExpression = Wildfire.ScheduleExpression,
      State = 'ENABLED',
      Targets = [
        dict(
          Arn = GetAtt(functionName, 'Arn'),
          Id = 'ScheduledRuleTarget'
        )
      ]
    )
  ))

  make_lambda_Permission('PermissionForEventsToInvokeLambda', dict(
    FunctionName = functionName,
    Principal = 'events.amazonaws.com',
    SourceArn = GetAtt('ScheduledRule', 'Arn')
  ))

def make_lambda_Permission(resourceName, permission):
  Wildfire.resource(resourceName, dict(
    Type = 'AWS::Lambda::Permission',
    Properties = dict(
      FunctionName = Ref(permission['FunctionName']),
      Action = 'lambda:InvokeFunction',
      Principal = permission['Principal'],
      SourceArn = permission['SourceArn']
    )
  ))
