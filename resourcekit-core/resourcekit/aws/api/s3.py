from typing import List, Optional, TypedDict

BucketName = str
AccountId = str
HostName = str
HttpErrorCodeReturnedEquals = str
HttpRedirectCode = str
KeyPrefixEquals = str
ObjectKey = str
ReplaceKeyPrefixWith = str
ReplaceKeyWith = str
Suffix = str


class ErrorCode(str):
    NoSuchBucket = "NoSuchBucket"
    NoSuchWebsiteConfiguration = "NoSuchWebsiteConfiguration"


class Protocol(str):
    http = "http"
    https = "https"


class ErrorDocument(TypedDict, total=False):
    Key: ObjectKey


class IndexDocument(TypedDict, total=False):
    Suffix: Suffix


class RedirectAllRequestsTo(TypedDict, total=False):
    HostName: HostName
    Protocol: Optional[Protocol]


class Condition(TypedDict, total=False):
    HttpErrorCodeReturnedEquals: Optional[HttpErrorCodeReturnedEquals]
    KeyPrefixEquals: Optional[KeyPrefixEquals]


class Redirect(TypedDict, total=False):
    HostName: Optional[HostName]
    HttpRedirectCode: Optional[HttpRedirectCode]
    Protocol: Optional[Protocol]
    ReplaceKeyPrefixWith: Optional[ReplaceKeyPrefixWith]
    ReplaceKeyWith: Optional[ReplaceKeyWith]


class RoutingRule(TypedDict, total=False):
    Condition: Optional[Condition]
    Redirect: Redirect


RoutingRules = List[RoutingRule]


class WebsiteConfiguration(TypedDict, total=False):
    ErrorDocument: Optional[ErrorDocument]
    IndexDocument: Optional[IndexDocument]
    RedirectAllRequestsTo: Optional[RedirectAllRequestsTo]
    RoutingRules: Optional[RoutingRules]


class GetBucketWebsiteOutput(TypedDict, total=False):
    RedirectAllRequestsTo: Optional[RedirectAllRequestsTo]
    IndexDocument: Optional[IndexDocument]
    ErrorDocument: Optional[ErrorDocument]
    RoutingRules: Optional[RoutingRules]


class PutBucketWebsiteRequest(TypedDict, total=False):
    Bucket: BucketName
    WebsiteConfiguration: WebsiteConfiguration
    ExpectedBucketOwner: Optional[AccountId]


class GetBucketWebsiteRequest(TypedDict, total=False):
    Bucket: BucketName
    ExpectedBucketOwner: Optional[AccountId]


class DeleteBucketWebsiteRequest(TypedDict, total=False):
    Bucket: BucketName
    ExpectedBucketOwner: Optional[AccountId]
