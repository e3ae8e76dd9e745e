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

def make():
  Wildfire.parameter('GitSha', 'The SHA')
  Wildfire.parameter('ownerId', 'owner id')
  Wildfire.parameter('mapboxAccessToken', 'mapbox access token')

  make_Datasets()

  Wildfire.parameter(
    'perimeterDatasetNamePrefix',
    'prefix for perimeter dataset names'
  )
  Wildfire.parameter(
    'AlarmEmail',
    'where to send alarms',
    default = Wildfire.AlarmEmail
  )

def make_Datasets():
  datasets = dict(
    points = 'points',
    maxPerimeters = 'max perimeters'
  )

  for key, label in datasets.items():
    Wildfire.parameter(f'{key}DatasetId', f'{label} dataset id')
    Wildfire.parameter(f'{key}TilesetName', f'{label} tileset name')
