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
from intrinsics import Ref

def make():
  make_sns_Topic()
  make_cloudwatch_ErrorAlarm(Wildfire.functions['Update'])

def make_sns_Topic():
  Wildfire.resource('AlarmSNSTopic', dict(
    Type = 'AWS::SNS::Topic',
    Properties = dict(
      TopicName = Ref('AWS::StackName'),
      Subscription = [
        dict(
          Endpoint = Ref('AlarmEmail'),
          Protocol = 'email'
        )
      ]
    )
  ))

def make_cloudwatch_ErrorAlarm(functionName):
  # any error inside one minute raises the alarm
  Wildfire.resource('ErrorAlarm', dict(
    Type = 'AWS::CloudWatch::Alarm',
    Properties = dict(
      AlarmDescription = 'Error notification',
      Namespace = 'AWS/Lambda',
      MetricName = 'Errors',
      Dimensions = [
        dict(
          Name = 'FunctionName',
          Value = Ref(functionName)
        )
      ],
      Statistic = 'Sum',
      Period = 60,
      EvaluationPeriods = 1,
      Threshold = 0,
      ComparisonOperator = 'GreaterThanThreshold',
      AlarmActions = [
        Ref('AlarmSNSTopic')
      ]
    )
  ))
