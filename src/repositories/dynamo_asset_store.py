"""
DynamoDB asset store.
Keeps one item per drug id with the encoded record and an optimistic version.
"""
from typing import Optional
import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError
from src.core import config
from src.core.exceptions import StoreException, WriteConflictException
from src.repositories.asset_store import AssetStore, StoredAsset


class DynamoAssetStore(AssetStore):
    """Repository for DynamoDB asset operations."""
    
    def __init__(self):
        self.dynamodb = boto3.resource('dynamodb', region_name=config.settings.aws_region)
        self.table = self.dynamodb.Table(config.settings.assets_table_name)
    
    def get(self, asset_id: str) -> Optional[StoredAsset]:
        """
        Read an asset blob with a strongly consistent read.
        
        Args:
            asset_id: Drug identifier
            
        Returns:
            StoredAsset or None if not found
            
        Raises:
            StoreException: If the read fails
        """
        try:
            response = self.table.get_item(Key={'asset_id': asset_id}, ConsistentRead=True)
            
            if 'Item' not in response:
                return None
            
            item = response['Item']
            return StoredAsset(data=self._payload_bytes(item['payload']), version=int(item['version']))
            
        except ClientError as e:
            raise StoreException(f"Failed to read asset {asset_id}: {str(e)}") from e
        except Exception as e:
            raise StoreException(f"Unexpected error reading asset {asset_id}: {str(e)}") from e
    
    def put(self, asset_id: str, data: bytes, expected_version: Optional[int] = None) -> int:
        """
        Conditionally write an asset blob.
        
        Args:
            asset_id: Drug identifier
            data: Encoded drug record
            expected_version: Version read before the change, None when creating
            
        Returns:
            The new version number
            
        Raises:
            WriteConflictException: If the item changed since it was read
            StoreException: If the write fails for any other reason
        """
        if expected_version is None:
            condition = Attr('asset_id').not_exists()
            new_version = 1
        else:
            condition = Attr('version').eq(expected_version)
            new_version = expected_version + 1
        
        try:
            self.table.put_item(
                Item={
                    'asset_id': asset_id,
                    'payload': data,
                    'version': new_version
                },
                ConditionExpression=condition
            )
            return new_version
            
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') == 'ConditionalCheckFailedException':
                raise WriteConflictException(
                    f"Asset {asset_id} was modified concurrently; retry the operation"
                ) from e
            raise StoreException(f"Failed to write asset {asset_id}: {str(e)}") from e
        except Exception as e:
            raise StoreException(f"Unexpected error writing asset {asset_id}: {str(e)}") from e
    
    def _payload_bytes(self, payload) -> bytes:
        """DynamoDB binary attributes come back wrapped in boto3's Binary type."""
        return bytes(getattr(payload, 'value', payload))
